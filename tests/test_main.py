import pytest
from unittest.mock import patch

from aptsync.main import main

# --- Fixtures ---

@pytest.fixture
def sources_file(tmp_path):
    path = tmp_path / "sources.list"
    path.write_text(
        "# test sources\n"
        "deb http://archive.example.com/ubuntu/ trusty main restricted\n"
    )
    return path

@pytest.fixture
def patched_session(make_session):
    """Routes requests.Session() inside the downloader to a FakeSession."""
    session = make_session()
    with patch('aptsync.downloader.requests.Session', return_value=session):
        yield session

MAIN_URI = "http://archive.example.com/ubuntu/dists/trusty/main/binary-amd64/Packages.gz"
RESTRICTED_URI = "http://archive.example.com/ubuntu/dists/trusty/restricted/binary-amd64/Packages.gz"

# --- Tests for main ---

def test_main_success(tmp_path, sources_file, patched_session, gz):
    patched_session.routes.update({MAIN_URI: gz("main"), RESTRICTED_URI: gz("restricted")})
    out = tmp_path / "out"

    status = main(["-s", str(sources_file), "-o", str(out), "--workers", "2"])

    assert status == 0
    assert (out / "index" / "archive.example.com_ubuntu_dists_trusty_main_Packages").read_text() == "main"
    assert (out / "index" / "archive.example.com_ubuntu_dists_trusty_restricted_Packages").read_text() == "restricted"
    assert not (out / "trust").exists()

def test_main_init_trust(tmp_path, sources_file, patched_session, gz):
    patched_session.routes.update({MAIN_URI: gz("main"), RESTRICTED_URI: gz("restricted")})
    out = tmp_path / "out"

    status = main(["-s", str(sources_file), "-o", str(out), "--init-trust"])

    assert status == 0
    assert (out / "trust" / "hashes" / "releases").is_file()

def test_main_failed_download_is_nonzero(tmp_path, sources_file, patched_session, gz):
    patched_session.routes.update({MAIN_URI: gz("main"), RESTRICTED_URI: 404})
    out = tmp_path / "out"

    status = main(["-s", str(sources_file), "-o", str(out)])

    assert status == 1
    assert (out / "index" / "archive.example.com_ubuntu_dists_trusty_main_Packages").read_text() == "main"

def test_main_extraction_failure_is_nonzero(tmp_path, sources_file, patched_session):
    patched_session.routes.update({MAIN_URI: b"not gzip", RESTRICTED_URI: b"not gzip"})
    assert main(["-s", str(sources_file), "-o", str(tmp_path / "out")]) == 1

def test_main_bad_sources_line(tmp_path, patched_session):
    path = tmp_path / "sources.list"
    path.write_text("deb [arch=amd64] http://archive.example.com/ubuntu trusty main\n")

    assert main(["-s", str(path), "-o", str(tmp_path / "out")]) == 1
    assert patched_session.calls == []

def test_main_missing_sources_file(tmp_path, patched_session):
    assert main(["-s", str(tmp_path / "missing.list"), "-o", str(tmp_path / "out")]) == 1

def test_main_empty_sources_file(tmp_path, patched_session):
    path = tmp_path / "sources.list"
    path.write_text("# nothing enabled\n\n")

    assert main(["-s", str(path), "-o", str(tmp_path / "out")]) == 0
    assert patched_session.calls == []

def test_main_non_utf8_comment(tmp_path, patched_session, gz):
    path = tmp_path / "sources.list"
    path.write_bytes(b"# D\xe9p\xf4t local\ndeb http://archive.example.com/ubuntu trusty main\n")
    patched_session.routes.update({MAIN_URI: gz("main")})

    assert main(["-s", str(path), "-o", str(tmp_path / "out")]) == 0
    assert patched_session.calls == [MAIN_URI]

def test_main_rejects_zero_workers(sources_file):
    with pytest.raises(SystemExit):
        main(["-s", str(sources_file), "--workers", "0"])

@patch('aptsync.main.run_sync_process', side_effect=KeyboardInterrupt)
def test_main_keyboard_interrupt(mock_run, sources_file):
    assert main(["-s", str(sources_file)]) == 1

@patch('aptsync.main.run_sync_process', side_effect=RuntimeError("unexpected"))
def test_main_unexpected_error(mock_run, sources_file):
    assert main(["-s", str(sources_file)]) == 1
