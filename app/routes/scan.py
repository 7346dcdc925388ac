from flask import Blueprint, request
from app.services.scan import redirect_for, REGISTER_PATH
from app.utils import ok, error, validate_schema
from app.schemas.scan import ScanResultRequest
from app.version import API_PREFIX

scan_bp = Blueprint("scan", __name__, url_prefix=API_PREFIX)


@scan_bp.route("/scan/result", methods=["POST"])
@validate_schema(ScanResultRequest)
def scan_result():
    """Turn a decoded barcode into the next screen to open."""
    payload = request.validated_data
    text = payload.text.strip()
    if not text:
        return error("Decoded text is empty", status=400)
    mode = payload.mode or request.args.get("mode")
    return ok({"text": text, "mode": mode, "redirect": redirect_for(text, mode)})


@scan_bp.route("/scan/manual", methods=["GET"])
def manual_registration():
    return ok({"redirect": REGISTER_PATH})
