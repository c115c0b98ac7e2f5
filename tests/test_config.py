import pytest
from svcaudit_core.config import AuditConfig, ToolsConfig, load_config
from svcaudit_core.core.context import AuditContext
from svcaudit_core.errors import ConfigError
from svcaudit_core.models.findings import VerbosityLevel

def test_default_config():
    config = AuditConfig()
    assert config.tools.sc == "sc"
    assert config.tools.wmic == "wmic"
    assert config.tools.icacls == "icacls"
    assert config.command_timeout is None

def test_default_context_is_quiet_and_frozen():
    context = AuditContext()
    assert context.verbosity == VerbosityLevel.QUIET
    assert context.timeout is None
    with pytest.raises(AttributeError):
        context.verbosity = VerbosityLevel.DEBUG

def test_load_config_without_files(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SVCAUDIT_CONFIG", raising=False)
    config = load_config()
    assert isinstance(config, AuditConfig)
    assert isinstance(config.tools, ToolsConfig)
    assert config.command_timeout is None

def test_load_config_env(monkeypatch, tmp_path):
    path = tmp_path / "audit.yaml"
    path.write_text("command_timeout: 30\ntools:\n  icacls: C:\\Windows\\System32\\icacls.exe\n")
    monkeypatch.setenv("SVCAUDIT_CONFIG", str(path))

    config = load_config()
    assert config.command_timeout == 30
    assert config.tools.icacls == "C:\\Windows\\System32\\icacls.exe"
    assert config.tools.sc == "sc"

def test_load_config_default_path(monkeypatch, tmp_path):
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "svcaudit.yaml").write_text("tools:\n  wmic: wmic.exe\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SVCAUDIT_CONFIG", raising=False)

    assert load_config().tools.wmic == "wmic.exe"

def test_missing_env_file_gives_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("SVCAUDIT_CONFIG", str(tmp_path / "absent.yaml"))
    assert load_config() == AuditConfig()

@pytest.mark.parametrize("content", [
    "command_timeout: 0\n",
    "command_timeout: -5\n",
    "command_timeout: soon\n",
    "- just\n- a list\n",
    "tools: [unclosed\n",
])
def test_invalid_config(content, monkeypatch, tmp_path):
    path = tmp_path / "audit.yaml"
    path.write_text(content)
    monkeypatch.setenv("SVCAUDIT_CONFIG", str(path))
    with pytest.raises(ConfigError):
        load_config()
