from flask import Blueprint, request
from app.utils import ok
from app.version import API_PREFIX
from app.views import MasterScreen, mounted

master_bp = Blueprint("master", __name__, url_prefix=API_PREFIX)


@master_bp.route("/master", methods=["GET"])
def master():
    screen = MasterScreen(
        mode=request.args.get("view", "shop"),
        search=request.args.get("search", ""),
    )
    with mounted(screen):
        return ok(screen.view())
