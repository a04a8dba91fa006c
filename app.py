import json
import logging
import time

from flask import Flask, Response, jsonify, request, stream_with_context
from dotenv import load_dotenv

from shor_backend.backend_config import SUPPORTED_LANGUAGES, configure_logging, get_settings
from shor_backend import locales
from shor_backend.shor_runner.attempt import InvalidInput
from shor_backend.shor_runner.circuit_diagram import circuit_summary, draw_png, draw_text
from shor_backend.shor_runner.random_source import get_random_source
from shor_backend.shor_runner.sequencer import run_factorization_attempts

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

settings = get_settings()

app = Flask(__name__)
# Configure caching based on environment
app.config['SEND_FILE_MAX_AGE_DEFAULT'] = 3600 if settings.production else 0
app.config['EXPLORER_SETTINGS'] = settings
app.secret_key = settings.secret_key


def current_settings():
    return app.config['EXPLORER_SETTINGS']


def _language(data=None):
    lang = request.args.get('lang') or (data or {}).get('lang') or current_settings().default_language
    return lang if lang in SUPPORTED_LANGUAGES else current_settings().default_language


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _bad_request(code, message, **extra):
    body = {"error": code, "message": message}
    body.update(extra)
    return jsonify(body), 400


def _parse_n(raw, lang):
    """Return (n, None) for an accepted modulus, or (None, error_response)."""
    cfg = current_settings()
    if isinstance(raw, bool) or raw is None:
        return None, _bad_request("invalid_number", locales.text(
            "error_number_range", lang, min_n=cfg.min_n, max_n=cfg.max_n))
    try:
        n = int(str(raw).strip())
    except ValueError:
        return None, _bad_request("invalid_number", locales.text(
            "error_number_range", lang, min_n=cfg.min_n, max_n=cfg.max_n))

    if n <= 1:
        return None, _bad_request("invalid_input", locales.text("error_number_too_small", lang))
    if n < cfg.min_n or n > cfg.max_n:
        return None, _bad_request("out_of_range", locales.text(
            "error_number_range", lang, min_n=cfg.min_n, max_n=cfg.max_n))
    if n % 2 == 0:
        # Even numbers are factored on the spot by 2
        return None, _bad_request(
            "invalid_input", locales.text("error_number_even", lang), factors=[2, n // 2])
    return n, None


def _start_session(data, lang):
    n, error = _parse_n(data.get('n'), lang)
    if error:
        return None, error
    seed = data.get('seed', current_settings().rng_seed)
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        return None, _bad_request("invalid_seed", "seed must be an integer")
    if seed is not None and seed < 0:
        return None, _bad_request("invalid_seed", "seed cannot be negative")
    try:
        factor_session = run_factorization_attempts(
            n,
            rng=get_random_source(seed),
            max_attempts=current_settings().max_attempts,
        )
    except InvalidInput as e:
        return None, _bad_request("invalid_input", str(e))
    logger.info("Starting factorization of %d", n)
    return factor_session, None


def _outcome(factor_session, lang):
    if factor_session.factors:
        return {
            "outcome": "success",
            "factors": list(factor_session.factors),
            "message": locales.text("factorization_complete", lang),
        }
    return {
        "outcome": "exhausted",
        "factors": None,
        "message": locales.text("factorization_failed_message", lang, n=factor_session.n),
    }


# ---- Health ----
@app.route("/api/health")
def health():
    cfg = current_settings()
    return jsonify({
        "status": "ok",
        "max_attempts": cfg.max_attempts,
        "min_n": cfg.min_n,
        "max_n": cfg.max_n,
        "languages": list(SUPPORTED_LANGUAGES),
    })


# ---- Factorization routes ----
@app.route("/api/factor", methods=["POST"])
def factor_route():
    data = _json_body()
    lang = _language(data)
    factor_session, error = _start_session(data, lang)
    if error:
        return error

    snapshots = [record.to_dict() for record in factor_session]
    result = {
        "n": factor_session.n,
        "attempts": [record.to_dict() for record in factor_session.attempts],
        "snapshots": snapshots,
    }
    result.update(_outcome(factor_session, lang))
    return jsonify(result)


@app.route("/api/factor/stream", methods=["POST"])
def factor_stream_route():
    data = _json_body()
    lang = _language(data)
    factor_session, error = _start_session(data, lang)
    if error:
        return error
    delay = current_settings().step_delay

    def generate():
        for index, record in enumerate(factor_session):
            if index and delay:
                time.sleep(delay)  # Pause for UI animation
            yield json.dumps({"type": "snapshot", "record": record.to_dict()}) + "\n"
        outcome = {"type": "outcome", "n": factor_session.n}
        outcome.update(_outcome(factor_session, lang))
        yield json.dumps(outcome) + "\n"

    return Response(stream_with_context(generate()), mimetype="application/x-ndjson")


# ---- Circuit diagram ----
def _circuit_args():
    lang = _language()
    n, error = _parse_n(request.args.get('n'), lang)
    if error:
        return None, error
    a = request.args.get('a', type=int)
    t = request.args.get('t', type=int)
    if a is not None and not 2 <= a <= n - 1:
        return None, _bad_request("invalid_parameter", f"a must lie in [2, {n - 1}]")
    if t is not None and t < 1:
        return None, _bad_request("invalid_parameter", "t must be positive")
    return (n, a, t), None


@app.route("/api/circuit")
def circuit():
    args, error = _circuit_args()
    if error:
        return error
    n, a, t = args
    lang = _language()
    summary = circuit_summary(n, a=a, t=t)
    summary["title"] = locales.text("circuit_diagram_title", lang)
    summary["diagram"] = draw_text(n, a=a, t=t)
    return jsonify(summary)


@app.route("/api/circuit.png")
def circuit_png():
    args, error = _circuit_args()
    if error:
        return error
    n, a, t = args
    return Response(draw_png(n, a=a, t=t), mimetype="image/png")


# ---- Explanations & translations ----
@app.route("/api/explanations")
def explanation_list():
    lang = _language()
    return jsonify([locales.explanation(topic, lang) for topic in locales.ExplanationTopic])


@app.route("/api/explanations/<topic>")
def explanation_route(topic):
    lang = _language()
    try:
        return jsonify(locales.explanation(topic, lang))
    except ValueError:
        return jsonify({"error": "unknown_topic", "message": f"No explanation for '{topic}'"}), 404


@app.route("/api/translations/<lang>")
def translations_route(lang):
    try:
        labels = locales.translate(lang)
    except KeyError:
        return jsonify({"error": "unknown_language", "message": f"Unsupported language '{lang}'"}), 404
    return jsonify({
        "lang": lang,
        "labels": labels,
        "errors": {kind.value: message for kind, message in locales.ERROR_MESSAGES[lang].items()},
    })


if __name__ == "__main__":
    configure_logging(settings.log_level)
    debug = not settings.production
    app.run(host="0.0.0.0", port=settings.port, debug=debug)
