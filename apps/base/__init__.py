from flask import (
    redirect,
    Blueprint,
    url_for,
    abort,
)
from flask_login import current_user


base = Blueprint("base", __name__, cli_group=None)


@base.route("/")
def main():
    # Speakers go straight to their talks.
    if current_user.is_authenticated:
        return redirect(url_for("talks.dashboard"))

    return redirect(url_for("users.login"))


@base.route("/404")
def raise_404():
    abort(404)


@base.route("/500")
def raise_500():
    abort(500)


from . import dev  # noqa
