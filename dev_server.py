import os

os.environ.setdefault("SETTINGS_FILE", os.path.join(os.path.dirname(os.path.abspath(__file__)), "config", "development.cfg"))

from main import create_app, db  # noqa: E402

app = create_app(dev_server=True)

with app.app_context():
    db.create_all()

if __name__ == "__main__":
    app.run(debug=True)
