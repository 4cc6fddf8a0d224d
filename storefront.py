from flask import Flask, render_template, request, jsonify
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from waitress import serve as waitress_serve

from config import DISPLAY_TZ, SUPPORT_EMAIL, HOST, PORT
from exceptions import NotFoundOrHttpError, TransportError
from models import TrackingState
from services.tracking import OrderTrackingController
from services.content import fetch_about_us
from services.media import is_allowed_media_url
from logger import get_logger

# Waitress imports the module and serves storefront:app (see serve below)
app = Flask(__name__)

log = get_logger("storefront")

try:
    TZ = ZoneInfo(DISPLAY_TZ)
except ZoneInfoNotFoundError:
    log.warning(f"Unknown DISPLAY_TZ {DISPLAY_TZ!r}; falling back to UTC")
    TZ = timezone.utc


def format_ts(value, fmt="%b %d, %Y · %I:%M %p"):
    if not isinstance(value, datetime):
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(TZ).strftime(fmt)
    except (ValueError, OverflowError):
        return ""

app.jinja_env.filters["ts"] = format_ts
app.jinja_env.tests["allowed_media"] = is_allowed_media_url


@app.context_processor
def support_contact():
    return {"support_email": SUPPORT_EMAIL}


@app.route("/tracking", methods=["GET", "POST"])
def tracking():
    # Page state lives only for this request.
    controller = OrderTrackingController()
    if request.method == "POST":
        controller.submit_query(request.form.get("order_code"))

    return render_template(
        "tracking.html",
        code=controller.code or (request.form.get("order_code") or ""),
        state=controller.state,
        error=controller.error,
        view=controller.display_model(),
    )


@app.route("/api/orders/<path:order_code>/track")
def tracking_json(order_code):
    controller = OrderTrackingController()
    if not controller.submit_query(order_code):
        return jsonify({"success": False, "error": "Order code is required"}), 400

    if controller.state is TrackingState.SUCCESS:
        return jsonify({"success": True, "data": controller.display_model().as_dict()})

    # Mirror the upstream failure kind; a business failure keeps the envelope at 200.
    if isinstance(controller.failure, NotFoundOrHttpError):
        status = 404
    elif isinstance(controller.failure, TransportError):
        status = 502
    else:
        status = 200
    return jsonify({"success": False, "error": controller.error}), status


@app.route("/about")
def about():
    content = fetch_about_us()
    return render_template("about.html", blocks=content.blocks, error=content.error)


def serve():
    log.info(f"Serving storefront on {HOST}:{PORT}")
    waitress_serve(app, host=HOST, port=PORT)


if __name__ == "__main__":
    # For local dev only. Deployments run storefront-serve (waitress)
    app.run(host=HOST, port=PORT, debug=True)
