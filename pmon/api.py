"""
Flask-based Web API for pmon.

Runs the detection and analysis pipeline on a project uploaded as a zip
archive.

Endpoints:
    GET  /api/health  - Health check endpoint
    POST /api/detect  - Classify an uploaded project
    POST /api/analyze - Analyze an uploaded project and return the report
"""

import tempfile
import zipfile
from dataclasses import replace
from pathlib import Path

from flask import Flask, Response, jsonify, request

from pmon import __version__
from pmon.analysis import run_analysis
from pmon.config import AnalysisConfig
from pmon.detector import detect_project
from pmon.exceptions import PmonError
from pmon.reporter import render_console, render_html
from pmon.schema import ProjectInfo

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = 50 * 1024 * 1024  # 50MB max upload

DEFAULT_API_FORMAT = "json"


def extract_zip(zip_file, target_dir: Path) -> None:
    """
    Extract a zip file to a target directory.

    Args:
        zip_file: The uploaded zip file object.
        target_dir: The directory to extract into.

    Raises:
        ValueError: If extraction fails or zip is invalid.
    """
    try:
        with zipfile.ZipFile(zip_file, "r") as zf:
            # Security check: prevent path traversal
            for member in zf.namelist():
                member_path = Path(member)
                if member_path.is_absolute() or ".." in member_path.parts:
                    raise ValueError(f"Invalid path in zip: {member}")
            zf.extractall(target_dir)
    except zipfile.BadZipFile as e:
        raise ValueError("Invalid or corrupted zip file") from e


def find_project_root(extracted_dir: Path) -> Path:
    """
    Find the actual project root after extraction.

    Archives downloaded from code hosts usually wrap everything in a single
    top-level directory (e.g., repo-main/); descend into it.

    Args:
        extracted_dir: The directory where files were extracted.

    Returns:
        The path to the project root directory.
    """
    contents = list(extracted_dir.iterdir())

    if len(contents) == 1 and contents[0].is_dir():
        return contents[0]

    return extracted_dir


def detect_uploaded_project(project_path: Path, extracted_dir: Path) -> ProjectInfo:
    """
    Classify an extracted upload.

    The reported root_path is relative to the archive root ("." for a flat
    archive, "repo-main" for one wrapped in a top-level directory), since the
    extraction directory is deleted once the request finishes.
    """
    project_info = detect_project(project_path)
    archive_path = project_path.relative_to(extracted_dir).as_posix()
    return replace(project_info, root_path=archive_path)


def receive_project(target_dir: Path) -> Path:
    """
    Unpack the uploaded project from the current request.

    Args:
        target_dir: Empty directory to extract into

    Returns:
        The project root inside target_dir

    Raises:
        ValueError: If no usable zip upload is present
    """
    if "file" not in request.files:
        raise ValueError("A zip 'file' upload is required")

    uploaded_file = request.files["file"]
    if not uploaded_file.filename:
        raise ValueError("No file selected")
    if not uploaded_file.filename.endswith(".zip"):
        raise ValueError("Only .zip files are supported")

    extract_zip(uploaded_file, target_dir)
    return find_project_root(target_dir)


def _flag(name: str) -> bool:
    return request.args.get(name, "false").lower() == "true"


def config_from_request() -> AnalysisConfig:
    """Build an AnalysisConfig from query-string options."""
    return AnalysisConfig(
        all=_flag("all"),
        build=_flag("build"),
        runtime=_flag("runtime"),
        static=_flag("static"),
        memory=_flag("memory"),
        network=_flag("network"),
        output=request.args.get("format", DEFAULT_API_FORMAT),
    )


@app.route("/api/health", methods=["GET"])
def health_check() -> Response:
    """Health check endpoint."""
    return jsonify({"status": "healthy", "version": __version__})


@app.route("/api/detect", methods=["POST"])
def detect() -> tuple[Response, int]:
    """
    Classify an uploaded project.

    Request: multipart/form-data with a 'file' field containing a zip.

    Returns:
        JSON response with the project classification
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        try:
            project_path = receive_project(Path(tmpdir))
            project_info = detect_uploaded_project(project_path, Path(tmpdir))
        except (ValueError, PmonError) as e:
            return jsonify({"error": str(e)}), 400

        return jsonify({"success": True, "project": project_info.to_dict()}), 200


@app.route("/api/analyze", methods=["POST"])
def analyze() -> tuple[Response, int]:
    """
    Analyze an uploaded project.

    Request: multipart/form-data with a 'file' field containing a zip.

    Optional query parameters:
        - format: 'json' | 'html' | 'console' (default: 'json')
        - all, build, runtime, static, memory, network: 'true' to select

    Returns:
        The report: a JSON document, an HTML page, or plain text
    """
    config = config_from_request()
    try:
        config.validate()
    except PmonError as e:
        return jsonify({"error": str(e)}), 400

    with tempfile.TemporaryDirectory() as tmpdir:
        try:
            project_path = receive_project(Path(tmpdir))
            project_info = detect_uploaded_project(project_path, Path(tmpdir))
            result = run_analysis(project_info, config)
        except (ValueError, PmonError) as e:
            return jsonify({"error": str(e)}), 400

    if config.output == "html":
        return Response(render_html(result), mimetype="text/html"), 200
    if config.output == "console":
        return Response(render_console(result), mimetype="text/plain"), 200
    return jsonify(result.to_dict()), 200


@app.errorhandler(413)
def request_entity_too_large(error):
    """Handle file too large errors."""
    return jsonify({"error": "File too large. Maximum size is 50MB."}), 413


@app.errorhandler(500)
def internal_server_error(error):
    """Handle internal server errors."""
    return jsonify({"error": "Internal server error"}), 500


def create_app() -> Flask:
    """
    Application factory for creating the Flask app.

    Returns:
        Configured Flask application instance.
    """
    return app


def main() -> None:
    """Run the development server."""
    print("Starting pmon API server...")
    print()
    print("API Endpoints:")
    print("  POST /api/detect  - Classify an uploaded project zip")
    print("  POST /api/analyze - Analyze an uploaded project zip")
    print("  GET  /api/health  - Health check")
    print()
    app.run(host="127.0.0.1", port=5001, debug=False)


if __name__ == "__main__":
    main()
