import gzip

from archivarr.main import main


def test_run_command_archives(tmp_path, make_log):
    src, dest = tmp_path / "logs", tmp_path / "vault"
    make_log(src / "app.log", "payload\n", age_days=10)
    make_log(src / "current.log", age_days=1)

    code = main(["run", "--source", str(src), "--dest", str(dest), "--days", "7"])

    assert code == 0
    assert (src / "current.log").exists()
    with gzip.open(dest / "app.log.gz", "rt", encoding="utf-8") as f:
        assert f.read() == "payload\n"


def test_run_defaults_archive_dir_under_source(tmp_path, make_log):
    src = tmp_path / "logs"
    make_log(src / "app.log", age_days=10)

    assert main(["run", "--source", str(src), "--quiet"]) == 0
    assert (src / "archive" / "app.log.gz").exists()


def test_plan_command_changes_nothing(tmp_path, make_log):
    src, dest = tmp_path / "logs", tmp_path / "vault"
    make_log(src / "app.log", age_days=10)

    assert main(["plan", "--source", str(src), "--dest", str(dest)]) == 0
    assert (src / "app.log").exists()
    assert not dest.exists()


def test_no_clobber_failure_exit_code(tmp_path, make_log):
    src, dest = tmp_path / "logs", tmp_path / "vault"
    dest.mkdir()
    (dest / "app.log.gz").write_bytes(b"keep")
    make_log(src / "app.log", age_days=10)

    code = main(["run", "--source", str(src), "--dest", str(dest), "--no-clobber"])

    assert code == 1
    assert (dest / "app.log.gz").read_bytes() == b"keep"
    assert (src / "app.log").exists()


def test_run_without_source_is_config_error(tmp_path):
    assert main(["run"]) == 2


def test_dotenv_configures_run(tmp_path, make_log):
    src = tmp_path / "logs"
    make_log(src / "old.txt", age_days=3)
    (tmp_path / ".env").write_text(
        f"ARCHIVARR_SOURCE_DIR={src}\n"
        "ARCHIVARR_RETENTION_DAYS=2\n"
        "ARCHIVARR_SUFFIX=.txt\n",
        encoding="utf-8",
    )

    assert main(["run"]) == 0
    assert (src / "archive" / "old.txt.gz").exists()


def test_runs_list_reports_status(tmp_path, make_log, capsys):
    src = tmp_path / "logs"
    make_log(src / "app.log", age_days=10)
    assert main(["run", "--source", str(src), "--quiet"]) == 0
    capsys.readouterr()

    assert main(["runs", "list"]) == 0

    out = capsys.readouterr().out
    assert "run-" in out
    assert "completed" in out


def test_runs_latest_without_runs(capsys):
    assert main(["runs", "latest"]) == 1
    assert "No runs found" in capsys.readouterr().out


def test_logs_show_tails_run_log(tmp_path, make_log, capsys, monkeypatch):
    monkeypatch.setenv("ARCHIVARR_RUN_ID", "fixed")
    src = tmp_path / "logs"
    make_log(src / "app.log", age_days=10)
    assert main(["run", "--source", str(src), "--quiet"]) == 0
    capsys.readouterr()

    assert main(["logs", "show", "run-fixed", "--tail", "5"]) == 0
    assert "RUN_STATUS=completed" in capsys.readouterr().out


def test_archives_list(tmp_path, capsys):
    dest = tmp_path / "vault"
    dest.mkdir()
    (dest / "app.log.gz").write_bytes(b"x")
    (dest / "readme.txt").write_text("ignored")

    assert main(["archives", "list", "--dest", str(dest)]) == 0

    out = capsys.readouterr().out
    assert "app.log.gz" in out
    assert "readme.txt" not in out


def test_env_dump(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("ARCHIVARR_SOURCE_DIR", str(tmp_path / "logs"))

    assert main(["env", "dump"]) == 0
    out = capsys.readouterr().out
    assert "retention_days" in out
    assert "Policy" in out


def test_run_rejects_non_finite_days(tmp_path, make_log):
    src = tmp_path / "logs"
    make_log(src / "app.log", age_days=10)

    assert main(["run", "--source", str(src), "--days", "nan"]) == 2
    assert (src / "app.log").exists()
