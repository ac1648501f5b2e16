from __future__ import annotations

import logging

import pytest

from hostprep.main import main


def _dig_answers(runner, stdout: str) -> None:
    runner.on_tool("dig", stdout=stdout)


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["example.cam"],
        ["example.cam", "203.0.113.10", "extra"],
        ["example.cam", "not-an-ip"],
        ["example.cam", "203.0.113.300"],
    ],
)
def test_usage_errors_exit_1_without_side_effects(argv, runner, which, as_root, cli_args, work_dir, tmp_path):
    with pytest.raises(SystemExit) as exc:
        main([*argv, *cli_args])

    assert exc.value.code == 1
    assert runner.calls == []
    assert not work_dir.exists()
    assert not (tmp_path / "logs").exists()
    assert not getattr(logging.getLogger(), "_hostprep_configured", False)


def test_dns_match_end_to_end(runner, which, as_root, cli_args, cached_release, capsys):
    _dig_answers(runner, "203.0.113.10\n")

    rc = main(["example.cam", "203.0.113.10", *cli_args])

    out = capsys.readouterr().out
    assert rc == 0
    assert "DNS is correctly pointing to this host." in out
    assert "DNS mismatch" not in out
    assert runner.commands("wget") == []


def test_dns_mismatch_is_reported_but_not_fatal(runner, which, as_root, cli_args, cached_release, capsys):
    _dig_answers(runner, "198.51.100.7\n")

    rc = main(["example.cam", "203.0.113.10", *cli_args])

    out = capsys.readouterr().out
    assert rc == 0
    assert "DNS mismatch detected!" in out
    assert "Expected: 203.0.113.10" in out
    assert "Got:      198.51.100.7" in out


def test_missing_dns_record_does_not_fail_run(runner, which, as_root, cli_args, cached_release, capsys):
    _dig_answers(runner, "")

    rc = main(["example.cam", "203.0.113.10", *cli_args])

    out = capsys.readouterr().out
    assert rc == 0
    assert "No DNS A record found for example.cam" in out
    assert "Installation complete" in out


def test_summary_lists_ports_binary_and_admin_url(runner, which, as_root, cli_args, cached_release, capsys):
    _dig_answers(runner, "203.0.113.10\n")

    main(["example.cam", "203.0.113.10", *cli_args])

    out = capsys.readouterr().out
    assert "Open ports 80, 443" in out
    assert str(cached_release / "demo") in out
    assert "Admin portal: https://example.cam/admin" in out


def test_binary_receives_configuration_transcript(runner, which, as_root, cli_args, cached_release):
    _dig_answers(runner, "203.0.113.10\n")

    assert main(["example.cam", "203.0.113.10", *cli_args]) == 0

    demo_calls = runner.commands("demo")
    assert [c.argv[1:] for c in demo_calls] == [["-h"], []]
    assert demo_calls[-1].input == "set domain example.cam\nset ipv4 203.0.113.10\n"
    assert demo_calls[-1].cwd == str(cached_release)


def test_missing_binary_stops_before_chmod_and_smoke_test(runner, which, as_root, cli_args, work_dir, capsys):
    work_dir.mkdir()
    (work_dir / "demo-v1.0.0-linux-64bit.zip").write_bytes(b"zip")

    rc = main(["example.cam", "203.0.113.10", *cli_args])

    err = capsys.readouterr().err
    assert rc == 1
    assert "Stage 50_extract_verify failed: binary missing after extraction" in err
    assert runner.commands("demo") == []
    assert runner.commands("dig") == []


def test_smoke_test_failure_is_fatal(runner, which, as_root, cli_args, cached_release, capsys):
    runner.on_tool("demo", returncode=126)

    rc = main(["example.cam", "203.0.113.10", *cli_args])

    err = capsys.readouterr().err
    assert rc == 1
    assert "binary failed to run" in err
    assert runner.commands("dig") == []


def test_download_failure_has_distinct_message(runner, which, as_root, cli_args, capsys):
    runner.on_tool("wget", returncode=8)

    rc = main(["example.cam", "203.0.113.10", *cli_args])

    err = capsys.readouterr().err
    assert rc == 1
    assert "Stage 40_fetch_release failed: download failed" in err
    assert runner.commands("unzip") == []


def test_download_uses_profile_url_when_archive_absent(runner, which, as_root, cli_args, work_dir):
    rc = main(["example.cam", "203.0.113.10", *cli_args, "--stop-after", "40_fetch_release"])

    assert rc == 0
    (wget,) = runner.commands("wget")
    assert wget.argv == [
        "wget",
        "-q",
        "https://releases.invalid/demo/v1.0.0/demo-v1.0.0-linux-64bit.zip",
        "-O",
        str(work_dir / "demo-v1.0.0-linux-64bit.zip"),
    ]


def test_version_and_mirror_overrides(runner, which, as_root, cli_args):
    main(
        [
            "example.cam",
            "203.0.113.10",
            *cli_args,
            "--release-version",
            "v2.0.0",
            "--mirror",
            "https://mirror.invalid/rel/",
            "--stop-after",
            "40_fetch_release",
        ]
    )

    (wget,) = runner.commands("wget")
    assert wget.argv[2] == "https://mirror.invalid/rel/v2.0.0/demo-v2.0.0-linux-64bit.zip"


def test_missing_apt_is_fatal_before_any_command(runner, which, as_root, cli_args, capsys):
    which.add("apt-get")

    rc = main(["example.cam", "203.0.113.10", *cli_args])

    assert rc == 1
    assert "apt-based systems" in capsys.readouterr().err
    assert runner.calls == []


def test_dry_run_executes_nothing(runner, which, as_root, cli_args, work_dir, capsys):
    which.update({"unzip", "dig"})

    rc = main(["example.cam", "203.0.113.10", *cli_args, "--dry-run"])

    assert rc == 0
    assert runner.calls == []
    assert not work_dir.exists()


def test_stage_failure_prints_exactly_one_line(runner, which, as_root, cli_args, work_dir, capsys):
    work_dir.mkdir()
    (work_dir / "demo-v1.0.0-linux-64bit.zip").write_bytes(b"zip")

    rc = main(["example.cam", "203.0.113.10", *cli_args])

    err = capsys.readouterr().err
    assert rc == 1
    assert len(err.splitlines()) == 1
    assert err.startswith("[x] Stage 50_extract_verify failed")


def test_successful_run_keeps_stderr_clean(runner, which, as_root, cli_args, cached_release, capsys):
    runner.on_tool("dig", stdout="203.0.113.10\n")

    assert main(["example.cam", "203.0.113.10", *cli_args]) == 0
    assert capsys.readouterr().err == ""


def test_malformed_config_is_a_usage_error(runner, which, as_root, cli_args, tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("profile: [unclosed\n", encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        main(["example.cam", "203.0.113.10", *cli_args, "--config", str(bad)])

    assert exc.value.code == 1
    assert runner.calls == []


def test_malformed_profile_file_fails_cleanly(runner, which, as_root, work_dir, tmp_path, capsys):
    bad = tmp_path / "broken.yaml"
    bad.write_text("id: demo\ntools: {unzip: unzip\n", encoding="utf-8")

    rc = main(
        [
            "example.cam",
            "203.0.113.10",
            "--profile-file",
            str(bad),
            "--work-dir",
            str(work_dir),
            "--log",
            str(tmp_path / "hostprep.log"),
        ]
    )

    err = capsys.readouterr().err
    assert rc == 1
    assert "is not valid YAML" in err
    assert len(err.splitlines()) == 1
