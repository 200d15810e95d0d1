from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from fwlog_compactor import CollectingSink, CompactorError, DataFrameSource, read_log, run_pipeline
from fwlog_compactor.cli import NO_DATA_MESSAGE, check_log_path

from fwlog_web.utils import options_from_body, parse_options_field

bp = Blueprint("analyze", __name__, url_prefix="/")


@bp.route("/analyze", methods=["POST"])
def analyze():
    """
    Compact an uploaded connection log and return the aggregated rows.

    Multipart form:
      file      the .csv export (required)
      encoding  text encoding of the export, default LOG_ENCODING
      options   JSON object, optional:
                {"remove_infra_port": true, "destination_ports": [22, 3389],
                 "date_time": "04:52", "interval": 4, "window_mode": "exclude"}
    """
    file = request.files.get("file")
    if file is None or not file.filename:
        return jsonify({"success": False, "error": "No file uploaded"}), 400

    err = check_log_path(file.filename)
    if err is not None:
        return jsonify({"success": False, "error": err}), 400

    encoding = request.form.get("encoding") or current_app.config["LOG_ENCODING"]
    sink = CollectingSink()
    try:
        options = options_from_body(parse_options_field(request.form.get("options")))
        frame = read_log(file.stream, encoding)
        run_pipeline(source=DataFrameSource(frame), sink=sink, options=options)
    except CompactorError as e:
        current_app.logger.warning("Analysis of %s rejected: %s", file.filename, e)
        return jsonify({"success": False, "error": str(e)}), 400

    rows = [r.to_row() for r in sink.records]
    current_app.logger.info(
        "%s: %d records, %d flows", file.filename, sink.metrics["records_loaded"], len(rows)
    )
    return jsonify({
        "success": True,
        "log_file": file.filename,
        "rows": rows,
        "metrics": sink.metrics,
        "message": None if rows else NO_DATA_MESSAGE,
    })
