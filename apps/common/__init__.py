import logging
import re
from urllib.parse import urljoin, urlparse, urlunparse

from decorator import decorator
from flask import abort, request
from flask import current_app as app
from jinja2.utils import urlize
from markupsafe import Markup

from models import naive_utcnow

logger = logging.getLogger(__name__)


def load_utility_functions(app_obj):
    # NOTE: do not reference the session, request, or g objects in
    # template functions. It will raise an error when called outside
    # of a request context.

    @app_obj.context_processor
    def utility_processor():
        return dict(
            feature_enabled=feature_enabled,
            CFP_CLOSED=feature_enabled("CFP_CLOSED"),
            year=naive_utcnow().year,
        )

    @app_obj.template_filter("pretty_text")
    def pretty_text(text):
        text = text.strip(" \n\r")
        # urlize calls markupsafe.escape before anything else
        text = urlize(text, trim_url_limit=40)
        text = "\n".join(f"<p>{para}</p>" for para in re.split(r"[\r\n]+", text))
        return Markup(text)


def feature_flag(feature):
    """
    Decorator for toggling features within the app.

    For now, returns a 404 if the feature is disabled.
    """

    def call(f, *args, **kw):
        if feature_enabled(feature):
            return f(*args, **kw)
        return abort(404)

    return decorator(call)


def feature_enabled(feature: str) -> bool:
    """
    Feature flags are plain booleans in the app config.
    """
    from_conf = app.config.get(feature, False)
    if isinstance(from_conf, bool):
        return from_conf
    logger.warning("Feature '%s' read from config was not a boolean! using bool()", feature)
    return bool(from_conf)


def make_safe_url(target: str) -> str | None:
    ref_url = urlparse(request.host_url)
    test_url = urlparse(urljoin(request.host_url, target))
    if test_url.scheme in ("http", "https") and ref_url.netloc == test_url.netloc:
        return urlunparse(test_url)
    return None


def get_next_url(default: str) -> str:
    next_url = request.args.get("next")
    if next_url:
        if safe_url := make_safe_url(next_url):
            return safe_url
        logger.error("Dropping unsafe next URL %r", next_url)
    return default
