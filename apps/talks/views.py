from flask import (
    render_template,
    redirect,
    request,
    flash,
    url_for,
)
from flask_login import current_user, login_required

from ..common import feature_enabled
from . import talks
from .forms import TalkForm
from .handler import EditDenied, TalkNotFound, TalkSubmissionHandler


def cfp_closed(action):
    if not feature_enabled("CFP_CLOSED"):
        return None

    flash(f"You cannot {action} talks once the call for papers has ended", "error")
    return redirect(url_for(".dashboard"))


@talks.route("/dashboard")
@login_required
def dashboard():
    return render_template("talks/dashboard.html", talks=current_user.talks.all())


@talks.route("/talk/create", methods=["GET"])
@login_required
def create():
    if closed := cfp_closed("create"):
        return closed

    return render_template("talks/create.html", form=TalkForm(formdata=None))


@talks.route("/talk/create", methods=["POST"])
@login_required
def process_create():
    if closed := cfp_closed("create"):
        return closed

    outcome = TalkSubmissionHandler.for_request().create_talk(request.form)
    if outcome.ok:
        return redirect(url_for(".dashboard"))

    return render_template("talks/create.html", form=outcome.form)


@talks.route("/talk/<int:talk_id>")
@login_required
def view(talk_id):
    try:
        talk = TalkSubmissionHandler.for_request().authorize_edit(talk_id)
    except (TalkNotFound, EditDenied):
        return redirect(url_for(".dashboard"))

    return render_template("talks/view.html", talk=talk)


@talks.route("/talk/<int:talk_id>/edit", methods=["GET"])
@login_required
def edit(talk_id):
    if closed := cfp_closed("edit"):
        return closed

    try:
        talk = TalkSubmissionHandler.for_request().authorize_edit(talk_id)
    except TalkNotFound:
        flash("We couldn't find that talk", "error")
        return redirect(url_for(".dashboard"))
    except EditDenied:
        return redirect(url_for(".dashboard"))

    form = TalkForm(formdata=None, obj=talk)
    return render_template("talks/edit.html", talk=talk, form=form)


@talks.route("/talk/<int:talk_id>/update", methods=["POST"])
@login_required
def update(talk_id):
    if closed := cfp_closed("edit"):
        return closed

    try:
        outcome = TalkSubmissionHandler.for_request().update_talk(talk_id, request.form)
    except TalkNotFound:
        flash("We couldn't find that talk", "error")
        return redirect(url_for(".dashboard"))
    except EditDenied:
        flash("You can only edit your own talks", "error")
        return redirect(url_for(".dashboard"))

    if outcome.ok:
        return redirect(url_for(".view", talk_id=talk_id))

    return render_template("talks/edit.html", talk=outcome.talk, form=outcome.form)
