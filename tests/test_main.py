"""
Tests for the command-line entry point.
"""

import pytest

import main


def test_both_roles(capsys):
    assert main.main(["06b858ec6f80452b"]) == 0
    out = capsys.readouterr().out
    assert "version draft-14" in out
    assert "=== client Initial ===" in out
    assert "a79943566c41342f2bc3de6b7c1539df" in out
    assert "=== server Initial ===" in out
    assert "26080e60d288db7df816a1cb0bc6c7f4" in out


def test_single_role_v1_quiet(capsys):
    assert main.main(["8394c8f03e515708", "--version", "v1", "--role", "server", "-q"]) == 0
    out = capsys.readouterr().out
    assert "QUIC Initial Keys" not in out
    assert "client Initial" not in out
    assert "c206b8d9b9f0f37644430b490eeaa314" in out


def test_suite_option(capsys):
    main.main(["8394c8f03e515708", "--suite", "TLS_AES_256_GCM_SHA384", "-r", "client", "-q"])
    out = capsys.readouterr().out
    key_line = next(line for line in out.splitlines() if line.strip().startswith("key"))
    assert len(key_line.split()[1]) == 64


def test_empty_dcid(capsys):
    assert main.main([""]) == 0
    assert "(empty)" in capsys.readouterr().out


@pytest.mark.parametrize("dcid", ["zz", "abc", "00" * 21])
def test_invalid_dcid(dcid, capsys):
    with pytest.raises(SystemExit) as e:
        main.main([dcid])
    assert e.value.code == 2
    assert "error" in capsys.readouterr().err


def test_unknown_version():
    with pytest.raises(SystemExit):
        main.main(["8394c8f03e515708", "--version", "v9"])
