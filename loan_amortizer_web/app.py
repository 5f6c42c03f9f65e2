"""Flask front end for the loan amortizer.

Every request builds its own ``LoanTerms``; nothing is kept between requests.
Loan inputs are read from the query string, a submitted form or a JSON body
with the fields ``asking_price``, ``down_payment``, ``rate`` and
``years_duration``.
"""

import os

from flask import Flask, jsonify, request

from loan_amortizer.calculator import LoanTerms
from loan_amortizer.config import Settings
from loan_amortizer.errors import InvalidInput, LoanAmortizerError
from loan_amortizer.log import get_logger, setup_logging
from loan_amortizer.serialization import terms_from_dict, terms_to_dict
from loan_amortizer.utils import parse_amount

settings = Settings.from_env()
setup_logging(settings.log_level, settings.log_format)
logger = get_logger(__name__)

app = Flask(__name__)
app.json.sort_keys = False


def _request_values() -> dict:
    if request.is_json:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise InvalidInput("Request body must be a JSON object")
        return data
    if request.method == "POST":
        return request.form.to_dict()
    return request.args.to_dict()


def _form_to_terms(values: dict) -> LoanTerms:
    """Build a ``LoanTerms`` from submitted values.

    Strings accept the shorthand ``165k`` and thousands separators; JSON
    numbers are passed through as they are.
    """
    missing = [key for key in ("asking_price", "rate", "years_duration") if values.get(key) in (None, "")]
    if missing:
        raise InvalidInput(f"Missing field(s): {', '.join(missing)}")

    asking_price = values["asking_price"]
    down_payment = values.get("down_payment") or "0"
    if isinstance(asking_price, str):
        asking_price = parse_amount(asking_price)
    if isinstance(down_payment, str):
        down_payment = parse_amount(down_payment)

    years_duration = values["years_duration"]
    if isinstance(years_duration, str):
        try:
            years_duration = int(years_duration.strip())
        except ValueError:
            raise InvalidInput(f"years_duration must be an integer, got {years_duration!r}")

    return LoanTerms.create(asking_price, down_payment, values["rate"], years_duration)


@app.errorhandler(LoanAmortizerError)
def handle_loan_error(exc: LoanAmortizerError):
    logger.warning("Rejected request to %s: %s", request.path, exc)
    return jsonify({"error": str(exc)}), 400


@app.route("/api/schedule", methods=["GET", "POST"])
def schedule():
    terms = _form_to_terms(_request_values())
    return jsonify(terms_to_dict(terms))


@app.route("/api/summary", methods=["GET", "POST"])
def summary():
    terms = _form_to_terms(_request_values())
    return jsonify(terms.summary())


@app.post("/api/import")
def import_record():
    data = request.get_json(silent=True)
    if data is None:
        raise InvalidInput("Request body must be JSON")
    terms = terms_from_dict(data)
    return jsonify(terms.summary())


if __name__ == "__main__":
    print("Starting Loan Amortizer web app...")
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", "5000")), debug=False)
