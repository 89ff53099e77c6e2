import json

import pytest

from dgb_rpcutil import cli


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setattr("dgb_rpcutil.config.DEFAULT_CONFIG_PATH", tmp_path / "missing.yaml")
    for name in ("DGB_NETWORK", "DGB_RPC_USER", "DGB_RPC_PASSWORD", "DGB_RPC_ENDPOINT"):
        monkeypatch.delenv(name, raising=False)


def test_help_prints_signature(capsys) -> None:
    cli.main(["help", "addmultisigaddress"])

    out = capsys.readouterr().out
    assert out.startswith('addmultisigaddress nrequired ["key",...] ( "label" )\n')


def test_help_without_name_lists_all_signatures(capsys) -> None:
    cli.main(["help"])

    lines = capsys.readouterr().out.splitlines()
    assert 'describeaddress "address"' in lines
    assert len(lines) == 3


def test_help_unknown_command_exits(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["help", "nosuch"])

    assert excinfo.value.code == 1
    assert "unknown command: nosuch" in capsys.readouterr().err


def test_createmultisig_prints_json(capsys, key_hex, ripemd160) -> None:
    cli.main(["--network", "regtest", "createmultisig", "1", key_hex["g"]])

    result = json.loads(capsys.readouterr().out)
    assert result["redeemScript"] == "51" + "21" + key_hex["g"] + "51" + "ae"


def test_client_errors_exit_with_message(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["createmultisig", "1", "zz"])

    assert excinfo.value.code == 1
    assert "error: Invalid public key: zz" in capsys.readouterr().err


def test_unknown_network_is_a_configuration_error(capsys) -> None:
    with pytest.raises(SystemExit):
        cli.main(["--network", "signet", "describeaddress", "D123"])

    assert "Unknown network 'signet'" in capsys.readouterr().err


def test_missing_ripemd160_reports_internal_error(capsys, key_hex, monkeypatch) -> None:
    def no_ripemd(name, *args, **kwargs):
        raise ValueError(f"unsupported hash type {name}")

    monkeypatch.setattr("dgb_rpcutil.keys.hashlib.new", no_ripemd)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--network", "regtest", "createmultisig", "1", key_hex["g"]])

    assert excinfo.value.code == 1
    assert "internal error: ripemd160 is not available" in capsys.readouterr().err
