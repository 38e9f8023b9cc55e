"""Flask API exposing the edu-stats lookup."""
from __future__ import annotations

import logging
from typing import Any

from dotenv import load_dotenv
from flask import Flask, jsonify, request

from edustats.service import lookup

load_dotenv()
logging.basicConfig(level=logging.INFO)

app = Flask(__name__)
app.json.ensure_ascii = False


@app.get("/health")
def health() -> str:
    return "alive"


@app.get("/api/edu-stats")
def edu_stats() -> Any:
    status, body = lookup(request.args)
    return jsonify(body), status


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8080)
