"""
Tests for pmon.api module.

Tests the Flask endpoints for project detection and analysis.
"""

import io
import json
import tempfile
import zipfile
from pathlib import Path

import pytest

from pmon.api import app, create_app, extract_zip, find_project_root


@pytest.fixture
def client():
    """Create a test client for the Flask app."""
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def make_zip(files: dict[str, str]) -> io.BytesIO:
    zip_buffer = io.BytesIO()
    with zipfile.ZipFile(zip_buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, content in files.items():
            zf.writestr(name, content)
    zip_buffer.seek(0)
    return zip_buffer


@pytest.fixture
def react_zip():
    """A React project archive."""
    return make_zip({
        "package.json": json.dumps({
            "dependencies": {"react": "18.2.0", "react-dom": "18.2.0"},
            "scripts": {"build": "vite build"},
        }),
        "vite.config.ts": "export default {}",
    })


@pytest.fixture
def nested_go_zip():
    """A Go project archive with a single top-level directory."""
    return make_zip({
        "svc-main/go.mod": "module example.com/svc\n",
        "svc-main/main.go": "package main\n",
    })


class TestHealthEndpoint:
    """Tests for the /api/health endpoint."""

    def test_health_check(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.get_json()
        assert data["status"] == "healthy"
        assert "version" in data


class TestDetectEndpoint:
    """Tests for the /api/detect endpoint."""

    def test_detect_react(self, client, react_zip):
        response = client.post(
            "/api/detect",
            data={"file": (react_zip, "project.zip")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 200
        project = response.get_json()["project"]
        assert project["type"] == "JavaScript"
        assert project["framework"] == "React"
        assert project["build_tool"] == "Vite"
        assert project["dependencies"] == {"react": "18.2.0", "react-dom": "18.2.0"}

    def test_detect_nested_archive(self, client, nested_go_zip):
        response = client.post(
            "/api/detect",
            data={"file": (nested_go_zip, "svc.zip")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 200
        assert response.get_json()["project"]["type"] == "Go"
        assert response.get_json()["project"]["root_path"] == "svc-main"

    def test_detect_reports_archive_relative_root(self, client, react_zip):
        response = client.post(
            "/api/detect",
            data={"file": (react_zip, "project.zip")},
            content_type="multipart/form-data",
        )

        root_path = response.get_json()["project"]["root_path"]
        assert root_path == "."
        assert tempfile.gettempdir() not in root_path

    def test_detect_unrecognized(self, client):
        response = client.post(
            "/api/detect",
            data={"file": (make_zip({"notes.txt": "hi"}), "project.zip")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 400
        assert "unknown project type" in response.get_json()["error"]

    def test_detect_no_file(self, client):
        response = client.post("/api/detect")

        assert response.status_code == 400
        assert "error" in response.get_json()

    def test_detect_wrong_extension(self, client):
        response = client.post(
            "/api/detect",
            data={"file": (io.BytesIO(b"not a zip"), "project.txt")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 400
        assert "zip" in response.get_json()["error"].lower()

    def test_detect_corrupted_zip(self, client):
        response = client.post(
            "/api/detect",
            data={"file": (io.BytesIO(b"not a zip"), "project.zip")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 400


class TestAnalyzeEndpoint:
    """Tests for the /api/analyze endpoint."""

    def test_analyze_json(self, client, react_zip):
        response = client.post(
            "/api/analyze",
            data={"file": (react_zip, "project.zip")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 200
        data = response.get_json()
        assert data["project_info"]["framework"] == "React"
        assert data["build_metrics"]["bundle_size"] == 1048576
        assert data["build_metrics"]["mock"] is True
        assert "runtime_metrics" not in data
        assert data["project_info"]["root_path"] == "."

    def test_analyze_html(self, client, react_zip):
        response = client.post(
            "/api/analyze?format=html",
            data={"file": (react_zip, "project.zip")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 200
        assert response.mimetype == "text/html"
        assert b"1.00 MB" in response.data

    def test_analyze_nested_archive_root(self, client, nested_go_zip):
        response = client.post(
            "/api/analyze",
            data={"file": (nested_go_zip, "svc.zip")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 200
        assert response.get_json()["project_info"]["root_path"] == "svc-main"

    def test_analyze_console(self, client, nested_go_zip):
        response = client.post(
            "/api/analyze?format=console",
            data={"file": (nested_go_zip, "svc.zip")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 200
        assert b"Bundle Size: 10.00 MB" in response.data

    def test_analyze_category_selection(self, client, react_zip):
        response = client.post(
            "/api/analyze?network=true",
            data={"file": (react_zip, "project.zip")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 200
        assert "build_metrics" not in response.get_json()

    def test_analyze_unsupported_format(self, client, react_zip):
        response = client.post(
            "/api/analyze?format=xml",
            data={"file": (react_zip, "project.zip")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 400
        assert "unsupported output format: xml" in response.get_json()["error"]

    def test_analyze_unsupported_type(self, client):
        response = client.post(
            "/api/analyze",
            data={"file": (make_zip({"build.gradle": ""}), "project.zip")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 400
        assert "unsupported project type: Java" in response.get_json()["error"]


class TestHelperFunctions:
    """Tests for helper functions."""

    def test_extract_zip_valid(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            target = Path(tmpdir)
            extract_zip(make_zip({"test.txt": "content"}), target)

            assert (target / "test.txt").read_text() == "content"

    def test_extract_zip_path_traversal(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ValueError, match="Invalid path"):
                extract_zip(make_zip({"../../../etc/passwd": "malicious"}), Path(tmpdir))

    def test_extract_zip_corrupted_keeps_cause(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ValueError, match="Invalid or corrupted zip file") as exc:
                extract_zip(io.BytesIO(b"not a zip"), Path(tmpdir))

        assert isinstance(exc.value.__cause__, zipfile.BadZipFile)

    def test_find_project_root_flat(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmppath = Path(tmpdir)
            (tmppath / "go.mod").write_text("module x")
            (tmppath / "main.go").write_text("package main")

            assert find_project_root(tmppath) == tmppath

    def test_find_project_root_nested(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmppath = Path(tmpdir)
            nested = tmppath / "repo-main"
            nested.mkdir()
            (nested / "go.mod").write_text("module x")

            assert find_project_root(tmppath) == nested

    def test_create_app(self):
        flask_app = create_app()
        assert flask_app.name == "pmon.api"


class TestErrorHandling:
    """Tests for error handling."""

    def test_404_not_found(self, client):
        assert client.get("/api/unknown").status_code == 404

    def test_method_not_allowed(self, client):
        assert client.get("/api/analyze").status_code == 405
