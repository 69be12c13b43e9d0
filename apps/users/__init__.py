from flask import (
    render_template,
    redirect,
    request,
    flash,
    url_for,
    Blueprint,
    session,
)
from flask_login import login_user, login_required, logout_user, current_user

from models.user import User

from ..common import feature_enabled, feature_flag, get_next_url
from .forms import LoginForm

users = Blueprint("users", __name__)


@users.route("/login/<email>")
@feature_flag("BYPASS_LOGIN")
def login_by_email(email):
    user = User.get_by_email(email)

    if current_user.is_authenticated:
        logout_user()

    if user is None:
        flash("Your email address was not recognised", "error")
    else:
        login_user(user)
        session.permanent = True

    return redirect(get_next_url(url_for("talks.dashboard")))


@users.route("/login", methods=["GET", "POST"])
def login():
    if current_user.is_authenticated:
        return redirect(get_next_url(url_for("talks.dashboard")))

    form = LoginForm(request.form, next=request.args.get("next"))
    if feature_enabled("BYPASS_LOGIN") and form.validate_on_submit():
        return redirect(
            url_for(".login_by_email", email=form.email.data, next=form.next._value() or None)
        )

    return render_template("account/login.html", form=form)


@users.route("/logout")
@login_required
def logout():
    session.permanent = False
    logout_user()
    return redirect(get_next_url(url_for("base.main")))
