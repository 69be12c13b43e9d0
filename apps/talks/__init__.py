""" Talk submission app """
from flask import Blueprint

talks = Blueprint("talks", __name__)

from . import views  # noqa
