import pytest
import yaml
from conftest import make_endpoints
from kubernetes import config as kube_config

from endpoints2slice import cli


def _write_input(tmp_path, *manifests):
    path = tmp_path / "endpoints.yaml"
    path.write_text(yaml.safe_dump_all(list(manifests)))
    return path


def _load_output(path):
    with open(path, encoding="utf-8") as f:
        return [d for d in yaml.safe_load_all(f) if d]


def test_converts_and_writes_config(tmp_path, capsys):
    src = _write_input(tmp_path, make_endpoints(name="web", ready=["10.0.0.1", "fe80::1"]),
                       make_endpoints(name="api", ready=["fe80::2"]))
    out = tmp_path / "out"
    cli.main(["--from", str(src), "--output-dir", str(out)])

    docs = _load_output(out / "endpointslices.yaml")
    assert [(d["metadata"]["name"], d["addressType"]) for d in docs] == [
        ("web", "IPv4"), ("api", "IPv6")]
    assert (out / "endpoints2slice.yaml").exists()
    err = capsys.readouterr().err
    assert "1 address(es) excluded" in err
    assert "First run" in err


def test_exclude_from_config(tmp_path):
    src = _write_input(tmp_path, make_endpoints(name="kube-dns", ready=["10.0.0.1"]),
                       make_endpoints(name="web", ready=["10.0.0.2"]))
    out = tmp_path / "out"
    out.mkdir()
    (out / "endpoints2slice.yaml").write_text("exclude:\n- kube-*\n")
    cli.main(["--from", str(src), "--output-dir", str(out), "--output-file", "s.yaml"])
    docs = _load_output(out / "s.yaml")
    assert [d["metadata"]["name"] for d in docs] == ["web"]


def test_missing_input_exits(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--from", str(tmp_path / "nope.yaml"), "--output-dir", str(tmp_path)])
    assert excinfo.value.code == 1


def test_no_endpoints_exits(tmp_path):
    src = tmp_path / "svc.yaml"
    src.write_text("kind: Service\nmetadata:\n  name: web\n")
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--from", str(src), "--output-dir", str(tmp_path / "out")])
    assert excinfo.value.code == 1


def test_apply_uses_namespace_flag(tmp_path, monkeypatch, fake_api):
    monkeypatch.setattr(cli, "_build_api", lambda kubeconfig, context: fake_api)
    src = _write_input(tmp_path, make_endpoints(name="web", ready=["10.0.0.1"], namespace=""))
    cli.main(["--from", str(src), "--output-dir", str(tmp_path / "out"),
              "--apply", "--namespace", "staging"])
    assert ("staging", "web") in fake_api.objects


def test_apply_error_exits(tmp_path, monkeypatch, fake_api):
    fake_api.fail_with = 403
    monkeypatch.setattr(cli, "_build_api", lambda kubeconfig, context: fake_api)
    src = _write_input(tmp_path, make_endpoints(name="web", ready=["10.0.0.1"]))
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--from", str(src), "--output-dir", str(tmp_path / "out"), "--apply"])
    assert excinfo.value.code == 1


def test_namespace_flag_is_not_saved_to_config(tmp_path, monkeypatch, fake_api):
    monkeypatch.setattr(cli, "_build_api", lambda kubeconfig, context: fake_api)
    src = _write_input(tmp_path, make_endpoints(name="web", ready=["10.0.0.1"], namespace=""))
    out = tmp_path / "out"
    cli.main(["--from", str(src), "--output-dir", str(out), "--apply", "--namespace", "staging"])
    assert yaml.safe_load((out / "endpoints2slice.yaml").read_text())["namespace"] == "default"

    cli.main(["--from", str(src), "--output-dir", str(out), "--apply"])
    assert ("default", "web") in fake_api.objects


def test_bad_kubeconfig_exits_cleanly(tmp_path, monkeypatch, capsys):
    def _raise(config_file=None, context=None):
        raise kube_config.ConfigException("Invalid kube-config file. No configuration found.")

    monkeypatch.setattr(cli.kube_config, "load_kube_config", _raise)
    src = _write_input(tmp_path, make_endpoints(name="web", ready=["10.0.0.1"]))
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--from", str(src), "--output-dir", str(tmp_path / "out"),
                  "--apply", "--context", "missing"])
    assert excinfo.value.code == 1
    assert "cannot load kubeconfig" in capsys.readouterr().err
