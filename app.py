import logging

from flask import Flask, request, jsonify

import settings
from huffman import compress, decompress, compression_stats

# average Huffman code length stays under log2(alphabet) + 1 bits per character
ENCODED_BITS_PER_CHAR = 32


class ApiError(Exception):
    def __init__(self, message, status=400):
        super().__init__(message)
        self.message = message
        self.status = status


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.update(
        DEBUG=settings.DEBUG,
        CORS_ORIGINS=settings.CORS_ORIGINS,
        LOG_LEVEL=settings.LOG_LEVEL,
        MAX_TEXT_LENGTH=settings.MAX_TEXT_LENGTH,
        MAX_ENCODED_LENGTH=settings.MAX_ENCODED_LENGTH,
    )
    if overrides:
        app.config.update(overrides)
    if not app.config["MAX_ENCODED_LENGTH"]:
        app.config["MAX_ENCODED_LENGTH"] = app.config["MAX_TEXT_LENGTH"] * ENCODED_BITS_PER_CHAR

    level = logging.getLevelName(app.config["LOG_LEVEL"].upper())
    if not isinstance(level, int):
        app.logger.warning("unknown log level %r, using INFO", app.config["LOG_LEVEL"])
        level = logging.INFO
    app.logger.setLevel(level)

    # Allow the browser client to call us from any configured origin
    @app.after_request
    def add_cors_headers(response):
        response.headers["Access-Control-Allow-Origin"] = app.config["CORS_ORIGINS"]
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        return response

    def read_body():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ApiError("Request body must be a JSON object.")
        return data

    def read_text(data, field, limit_key="MAX_TEXT_LENGTH"):
        value = data.get(field)
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise ApiError(f"'{field}' must be a string.")
        if len(value) > app.config[limit_key]:
            raise ApiError(f"'{field}' is too long.", status=413)
        return value

    def read_code_table(data):
        table = data.get("codeTable")
        if table is None:
            table = {}
        if not isinstance(table, dict):
            raise ApiError("'codeTable' must be an object.")
        for symbol, code in table.items():
            if len(symbol) != 1 or not isinstance(code, str):
                raise ApiError("'codeTable' must map single characters to bit strings.")
        return table

    @app.errorhandler(ApiError)
    def api_error(e):
        return jsonify({"error": e.message}), e.status

    # Health check
    @app.route("/api/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    # Compress endpoint
    @app.route("/api/compress", methods=["POST"])
    def compress_text():
        data = read_body()
        text = read_text(data, "text")
        try:
            result = compress(text)
        except Exception as e:
            app.logger.exception("compress failed")
            return jsonify({"error": f"Compression failed: {e}"}), 500

        app.logger.info("compressed %d chars into %d bits (%d symbols)",
                        len(text), len(result.encoded_text), len(result.code_table))
        return jsonify(result.to_dict())

    # Decompress endpoint
    @app.route("/api/decompress", methods=["POST"])
    def decompress_text():
        data = read_body()
        encoded = read_text(data, "encodedText", "MAX_ENCODED_LENGTH")
        table = read_code_table(data)
        try:
            text = decompress(encoded, table)
        except Exception as e:
            app.logger.exception("decompress failed")
            return jsonify({"error": f"Decompression failed: {e}"}), 500

        app.logger.info("decompressed %d bits into %d chars", len(encoded), len(text))
        return jsonify({"text": text})

    # Compression statistics for the client's size/ratio panel
    @app.route("/api/stats", methods=["POST"])
    def stats():
        data = read_body()
        text = read_text(data, "text")
        try:
            result = compress(text)
        except Exception as e:
            app.logger.exception("stats failed")
            return jsonify({"error": f"Compression failed: {e}"}), 500

        body = compression_stats(text, result.encoded_text)
        body.update(result.to_dict())
        return jsonify(body)

    return app


app = create_app()

# Run app
if __name__ == "__main__":
    logging.basicConfig(level=app.logger.level)
    app.run(host=settings.HOST, port=settings.PORT, debug=settings.DEBUG)
