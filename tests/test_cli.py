from __future__ import annotations

import json

from typer.testing import CliRunner

from cli.main import app

runner = CliRunner()


def _invoke(*args: str, input: str | None = None):
    return runner.invoke(app, ["--log-level", "CRITICAL", *args], input=input)


def test_consultar_json_with_mocks():
    result = _invoke("consultar", "123", "--mocks", "--scenario", "fraude", "--json")

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["policia"]["tiene_fraude"] is True
    assert data["clinico"]["antecedentes"][0]["doc"] == "123"


def test_consultar_reports_failures_as_data():
    result = _invoke("consultar", "123", "--mocks", "--scenario", "fail_all", "--json")

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {
        "clinico": {"error": "fetch failed (clinico)"},
        "policia": {"error": "fetch failed (policia)"},
    }


def test_consultar_table_and_output_file(tmp_path):
    output = tmp_path / "reporte.json"
    result = _invoke("consultar", "123", "--mocks", "--output", str(output))

    assert result.exit_code == 0, result.output
    assert "SIN FRAUDE" in result.stdout
    assert json.loads(output.read_text(encoding="utf-8"))["policia"]["tiene_fraude"] is False


def test_consultar_without_configuration_exits_with_error(monkeypatch):
    monkeypatch.delenv("BASES_EXT_BDNN_BASE_URL", raising=False)
    monkeypatch.delenv("BASES_EXT_POLICIA_BASE_URL", raising=False)

    result = _invoke("consultar", "123", "--no-mocks")

    assert result.exit_code == 2


def test_revisar_rejects_fraud():
    result = _invoke("revisar", "123", "--mocks", "--scenario", "fraude", "--solicitud-id", "s-1", "--json")

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["estado"] == "RECHAZADA"


def test_revisar_panel_shows_pending_on_errors():
    result = _invoke("revisar", "123", "--mocks", "--scenario", "fail_one")

    assert result.exit_code == 0, result.output
    assert "PENDIENTE" in result.stdout


def test_doctor_run_reports_missing_configuration(monkeypatch):
    monkeypatch.delenv("BASES_EXT_BDNN_BASE_URL", raising=False)
    monkeypatch.delenv("BASES_EXT_POLICIA_BASE_URL", raising=False)
    monkeypatch.setenv("BASES_EXT_USE_MOCKS", "false")

    result = _invoke("doctor", "run")

    assert result.exit_code == 0, result.output
    assert "MISSING" in result.stdout


def test_doctor_setup_writes_user_env(monkeypatch, tmp_path):
    monkeypatch.setattr("sys.platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    result = _invoke("doctor", "setup", input="https://bdnn.test\n\nhttps://policia.test\ntok\n")

    assert result.exit_code == 0, result.output
    content = (tmp_path / "bases-externas" / ".env").read_text(encoding="utf-8")
    assert "BASES_EXT_BDNN_BASE_URL=https://bdnn.test" in content
    assert "BASES_EXT_POLICIA_TOKEN=tok" in content
    assert "BASES_EXT_BDNN_TOKEN" not in content


def test_revisar_records_reviewer():
    result = _invoke("revisar", "123", "--mocks", "--revisado-por", "director-1", "--json")

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["estado"] == "APROBADA"
    assert data["validacion"]["validado_por"] == "director-1"
    assert data["validacion"]["resultado"] is True
