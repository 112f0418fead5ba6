from dotenv import load_dotenv
load_dotenv()
import os
import time
import logging
from collections import defaultdict, deque

from flask import Flask, request, jsonify

from cipher_engine.charset import CharacterSet
from cipher_engine.frequency_analyser import analyse, rank_languages, tally, chi_square
from cipher_engine.languages import LANGUAGE_NAMES, get_profile
from cipher_engine.patterns import PatternDictionary, make_pattern, find_candidates
from cipher_engine.replacement import ReplacementMap
from cipher_engine.segmenter import (
    DECODE, ENCODE, build_replacement, build_tabular, chunk, clean_string,
)
from cipher_engine.tabular import CipherType, parse_cipher_type

# ----- Configuration -----
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
MAX_ENCODE_WIDTH = int(os.environ.get("CIPHER_MAX_ENCODE_WIDTH", 53))
ANSWER_WIDTH = int(os.environ.get("CIPHER_ANSWER_WIDTH", 40))
LANGUAGE_DIR = os.environ.get("CIPHER_LANGUAGE_DIR") or os.path.join(BASE_DIR, "Languages")
DEFAULT_LANG = os.environ.get("CIPHER_DEFAULT_LANG", "en")
RATE_LIMIT = int(os.environ.get("CIPHER_RATE_LIMIT", 60))

app = Flask(__name__)
app.config["MAX_ENCODE_WIDTH"] = MAX_ENCODE_WIDTH
app.config["LANGUAGE_DIR"] = LANGUAGE_DIR

logging.getLogger("werkzeug").setLevel(logging.INFO)

# (client ip, bucket) -> timestamps of recent calls
_RATE = defaultdict(deque)
_DICTIONARIES = {}


def client_ip():
    forwarded = request.headers.get("X-Forwarded-For", "")
    return forwarded.split(",")[0].strip() or request.remote_addr or "unknown"


def rate_limit(bucket, limit, window_s=60):
    """
    Sliding-window limiter kept in process memory.  Returns (allowed, ip);
    a rejected call is not recorded.
    """
    ip = client_ip()
    now = time.monotonic()
    calls = _RATE[(ip, bucket)]
    while calls and now - calls[0] >= window_s:
        calls.popleft()
    if len(calls) >= limit:
        return False, ip
    calls.append(now)
    return True, ip


@app.after_request
def add_security_headers(resp):
    # JSON only, never cached
    resp.headers.setdefault("X-Content-Type-Options", "nosniff")
    resp.headers.setdefault("X-Frame-Options", "DENY")
    resp.headers.setdefault("Referrer-Policy", "no-referrer")
    resp.headers.setdefault("Cache-Control", "no-store")
    return resp


def get_dictionary(lang):
    """Word list for `lang`, read once from LANGUAGE_DIR.  Empty when missing."""
    if lang in _DICTIONARIES:
        return _DICTIONARIES[lang]
    path = os.path.join(app.config["LANGUAGE_DIR"], f"{lang}.txt")
    try:
        with open(path, encoding="utf-8") as fh:
            dictionary = PatternDictionary.from_lines(fh, lang)
    except FileNotFoundError:
        app.logger.warning("[LANG] no word list for %s at %s", lang, path)
        dictionary = PatternDictionary(lang)
    _DICTIONARIES[lang] = dictionary
    return dictionary


def _params():
    """Form fields or a JSON object body, whichever the caller sent."""
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}
    return request.form


def _non_string_field(data, names):
    """First of `names` present in `data` with a non-string value, else None."""
    for name in names:
        value = data.get(name)
        if value is not None and not isinstance(value, str):
            return name
    return None


def _int_param(data, name, default):
    value = data.get(name)
    if value in (None, ""):
        return default
    return int(value)


def _lines(segments):
    return [{"cipher": s.cipher, "plain": s.plain} for s in segments]


# ------------------- Index -------------------
@app.route("/", methods=["GET"])
def index():
    return jsonify({
        "languages": LANGUAGE_NAMES,
        "cipher_types": [c.value for c in CipherType],
        "max_encode_width": app.config["MAX_ENCODE_WIDTH"],
    })


# ------------------- Tools API -------------------
@app.route("/tools/run", methods=["POST"])
def tools_run():
    data = _params()
    bad = _non_string_field(data, ("text", "tool_type", "lang", "key", "word", "cipher_type"))
    if bad:
        app.logger.warning("[TOOLS] non-string %s field", bad)
        return jsonify({"error": f"{bad} must be a string."}), 400
    text = data.get("text", "")
    tool_type = (data.get("tool_type") or "").lower()
    lang = data.get("lang") or DEFAULT_LANG
    if lang not in LANGUAGE_NAMES:
        return jsonify({"error": f"Unknown language: {lang}"}), 400

    try:
        # replacement answers are laid out narrower than encoded ciphers
        default_width = ANSWER_WIDTH if tool_type == "replace" else app.config["MAX_ENCODE_WIDTH"]
        width = _int_param(data, "width", default_width)
        block_size = _int_param(data, "block_size", 0)
        block_length = _int_param(data, "block_length", 5)
        pattern_width = _int_param(data, "pattern_width", 1)
    except (TypeError, ValueError):
        app.logger.warning("[TOOLS] bad numeric field for %s", tool_type)
        return jsonify({"error": "Numeric fields must be integers."}), 400
    if width < 1 or block_length < 1 or pattern_width < 1:
        return jsonify({"error": "Widths must be at least 1."}), 400

    if tool_type == "frequency":
        charset = CharacterSet.for_language(lang)
        freq = tally(text, charset)
        summary = analyse(text, lang)
        result = {
            "frequencies": dict(freq),
            "chi_square": chi_square(freq, get_profile(lang)),
            "languages": rank_languages(text),
            "trigrams": summary["trigrams"],
            "bigrams": summary["bigrams"],
            "ioc": summary["ioc"],
            "cipher_type": summary["cipher_type"],
        }

    elif tool_type in (ENCODE, DECODE):
        cipher_type = parse_cipher_type(data.get("cipher_type"))
        segments = build_tabular(
            clean_string(text),
            data.get("key", ""),
            cipher_type,
            tool_type,
            width,
            block_size,
        )
        result = {"cipher_type": cipher_type.value, "lines": _lines(segments)}

    elif tool_type == "replace":
        mapping = data.get("replacement") or {}
        if not isinstance(mapping, dict):
            return jsonify({"error": "replacement must be an object."}), 400
        freq = {}
        aca = str(data.get("aca", "")).lower() in ("1", "true", "on", "yes")
        segments = build_replacement(clean_string(text), ReplacementMap(mapping), width, lang,
                                     freq=freq, aca=aca)
        result = {"lines": _lines(segments), "frequencies": freq}

    elif tool_type == "pattern":
        word = data.get("word") or text
        mapping = data.get("replacement") or {}
        if not isinstance(mapping, dict):
            return jsonify({"error": "replacement must be an object."}), 400
        known = ReplacementMap(mapping)
        matches = find_candidates(word, known, get_dictionary(lang), limit=50)
        result = {
            "pattern": make_pattern(CharacterSet.for_language(lang).tokenize(word), pattern_width),
            "candidates": [entry.word for entry in matches],
        }

    elif tool_type == "chunk":
        result = {"text": chunk(text, block_length, CharacterSet.for_language(lang))}

    else:
        return jsonify({"error": "Unknown tool selected."}), 400

    return jsonify(result)


# ==============================
#  ENCODER / DECODER API ROUTES
# ==============================
def perform_cipher(cipher, text, key, mode=ENCODE):
    """Whole message through a tabular cipher, lines joined back together."""
    segments = build_tabular(clean_string(text), key, parse_cipher_type(cipher), mode,
                             app.config["MAX_ENCODE_WIDTH"])
    side = "cipher" if mode == ENCODE else "plain"
    return "".join(getattr(s, side) for s in segments)


def _api_cipher(mode):
    ok, ip = rate_limit("api_cipher", limit=RATE_LIMIT, window_s=60)
    if not ok:
        app.logger.warning("[API] rate limit hit for %s", ip)
        return jsonify({"error": "Rate limit exceeded. Try again shortly."}), 429
    data = _params()
    bad = _non_string_field(data, ("text", "cipher", "key"))
    if bad:
        app.logger.warning("[API] non-string %s field from %s", bad, ip)
        return jsonify({"error": f"{bad} must be a string."}), 400
    text = data.get("text", "")
    cipher = (data.get("cipher") or "").strip().lower()
    key = (data.get("key") or "").strip()
    return jsonify({"result": perform_cipher(cipher, text, key, mode=mode)})


@app.route("/api/encode", methods=["POST"])
def api_encode():
    return _api_cipher(ENCODE)


@app.route("/api/decode", methods=["POST"])
def api_decode():
    return _api_cipher(DECODE)


if __name__ == "__main__":
    app.run(debug=True)
