import pytest

from ccrun.config.models import ModelMapping
from ccrun.models import BuiltinEndpointError, EndpointNotFoundError, InvalidUrlError, TokenRequiredError

def test_list_endpoints_marks_last_used(commands, launcher_store, output):
    launcher_store.save_token("glm", "sk-glm-1234567890")
    launcher_store.add_custom_endpoint("mine", "https://mine.example.com", token="sk-mine-abcdefgh")
    launcher_store.set_last_used("mine")

    assert commands.list_endpoints() == 0

    text = "\n".join(output)
    assert "Built-in:" in text
    glm_line = next(line for line in output if "glm" in line)
    assert "sk-g...7890" in glm_line
    assert "sk-glm-1234567890" not in text
    deepseek_line = next(line for line in output if "deepseek" in line)
    assert "no token" in deepseek_line
    mine_line = next(line for line in output if "mine" in line)
    assert mine_line.startswith(" *mine")
    assert "https://mine.example.com" in mine_line

def test_list_endpoints_without_custom(commands, output):
    commands.list_endpoints()
    assert "Custom: none" in output

def test_add_custom_endpoint(commands, launcher_store, output, scripted_prompt):
    scripted_prompt.answers.extend(["sk-new", "my-model"])

    assert commands.add("mine", "https://mine.example.com/anthropic") == 0

    endpoint = launcher_store.read().find_endpoint("mine")
    assert endpoint.endpoint == "https://mine.example.com/anthropic"
    assert endpoint.token == "sk-new"
    assert endpoint.models == ModelMapping(haiku="my-model", opus="my-model", sonnet="my-model")
    assert output[-1] == "Added endpoint: mine"

def test_add_without_token_or_model(commands, launcher_store):
    commands.add("mine", "https://mine.example.com")

    endpoint = launcher_store.read().find_endpoint("mine")
    assert endpoint.token is None
    assert endpoint.models is None

def test_add_replaces_existing(commands, launcher_store, output):
    launcher_store.add_custom_endpoint("mine", "https://old.example.com")

    commands.add("mine", "https://new.example.com")

    endpoints = launcher_store.get_custom_endpoints()
    assert [e.endpoint for e in endpoints] == ["https://new.example.com"]
    assert output[-1] == "Updated endpoint: mine"

def test_add_builtin_name_is_rejected(commands, launcher_store, scripted_prompt):
    with pytest.raises(BuiltinEndpointError):
        commands.add("glm", "https://glm.example.com")

    assert not launcher_store.file_path.exists()
    assert scripted_prompt.questions == []

def test_add_invalid_url_is_rejected(commands, launcher_store):
    with pytest.raises(InvalidUrlError) as exc_info:
        commands.add("mine", "not a url")

    assert exc_info.value.exit_code == 1
    assert not launcher_store.file_path.exists()

def test_remove_custom_endpoint(commands, launcher_store, output):
    launcher_store.add_custom_endpoint("mine", "https://mine.example.com")

    assert commands.remove("mine") == 0

    assert launcher_store.get_custom_endpoints() == []
    assert output[-1] == "Removed endpoint: mine"

def test_remove_builtin_is_rejected(commands):
    with pytest.raises(BuiltinEndpointError):
        commands.remove("deepseek")

def test_remove_unknown_endpoint_leaves_config_unchanged(commands, launcher_store):
    launcher_store.add_custom_endpoint("mine", "https://mine.example.com")
    before = launcher_store.file_path.read_bytes()

    with pytest.raises(EndpointNotFoundError) as exc_info:
        commands.remove("other")

    assert exc_info.value.exit_code == 1
    assert "other" in exc_info.value.message
    assert launcher_store.file_path.read_bytes() == before

def test_token_set_builtin(commands, launcher_store, output):
    assert commands.token_set("glm", "sk-glm") == 0

    assert launcher_store.get_token("glm") == "sk-glm"
    assert output[-1] == "Saved the token for glm"

def test_token_set_prompts_when_omitted(commands, launcher_store, scripted_prompt):
    scripted_prompt.answers.append("sk-prompted")

    commands.token_set("deepseek")

    assert launcher_store.get_token("deepseek") == "sk-prompted"
    assert scripted_prompt.questions == ["Enter the API token for deepseek: "]

def test_token_set_custom_endpoint(commands, launcher_store):
    launcher_store.add_custom_endpoint("mine", "https://mine.example.com")

    commands.token_set("mine", "sk-mine")

    assert launcher_store.read().find_endpoint("mine").token == "sk-mine"
    assert launcher_store.get_token("mine") is None

def test_token_set_empty_is_rejected(commands, launcher_store):
    with pytest.raises(TokenRequiredError):
        commands.token_set("glm")

    assert launcher_store.get_token("glm") is None

def test_token_set_unknown_provider(commands):
    with pytest.raises(EndpointNotFoundError):
        commands.token_set("nope", "sk")

def test_token_clean(commands, launcher_store, output):
    launcher_store.save_token("glm", "sk-glm")

    commands.token_clean("glm")
    assert launcher_store.get_token("glm") is None
    assert output[-1] == "Cleared the token for glm"

    commands.token_clean("glm")
    assert output[-1] == "No token configured for glm"

def test_proxy_on_prompts_for_url(commands, launcher_store, settings_store, scripted_prompt):
    scripted_prompt.answers.append("http://127.0.0.1:7890")

    assert commands.proxy_on() == 0

    proxy_config = launcher_store.get_proxy_config()
    assert proxy_config.enabled is True
    assert proxy_config.url == "http://127.0.0.1:7890"
    assert settings_store.get_proxy() == "http://127.0.0.1:7890"

def test_proxy_on_reuses_saved_url(commands, launcher_store, settings_store, scripted_prompt):
    launcher_store.set_proxy_config(False, "http://saved:8080", True)

    commands.proxy_on()

    assert scripted_prompt.questions == []
    proxy_config = launcher_store.get_proxy_config()
    assert proxy_config.enabled is True
    assert proxy_config.clear_for_official is True
    assert settings_store.get_proxy() == "http://saved:8080"

def test_proxy_on_invalid_url(commands, launcher_store, settings_store, scripted_prompt):
    scripted_prompt.answers.append("nonsense")

    with pytest.raises(InvalidUrlError):
        commands.proxy_on()

    assert launcher_store.get_proxy_config().enabled is False
    assert not settings_store.file_path.exists()

def test_proxy_off_keeps_url(commands, launcher_store, settings_store, write_json, read_json):
    launcher_store.set_proxy_config(True, "http://saved:8080")
    write_json(settings_store.file_path, {"proxy": "http://saved:8080", "theme": "dark"})

    commands.proxy_off()

    proxy_config = launcher_store.get_proxy_config()
    assert proxy_config.enabled is False
    assert proxy_config.url == "http://saved:8080"
    assert read_json(settings_store.file_path) == {"theme": "dark"}

def test_proxy_reset(commands, launcher_store, settings_store, write_json, read_json):
    launcher_store.set_proxy_config(True, "http://saved:8080", True)
    write_json(settings_store.file_path, {"proxy": "http://saved:8080"})

    commands.proxy_reset()

    proxy_config = launcher_store.get_proxy_config()
    assert proxy_config.enabled is False
    assert proxy_config.url is None
    assert proxy_config.clear_for_official is None
    assert "proxy" not in read_json(settings_store.file_path)

def test_proxy_status(commands, launcher_store, settings_store, output):
    launcher_store.set_proxy_config(True, "http://saved:8080", False)
    settings_store.set_proxy("http://saved:8080")

    commands.proxy_status()

    text = "\n".join(output)
    assert "status: on" in text
    assert "url: http://saved:8080" in text
    assert "clear for official launches: no" in text
    assert "proxy: http://saved:8080" in text

def test_proxy_status_unconfigured(commands, output):
    commands.proxy_status()

    text = "\n".join(output)
    assert "status: off" in text
    assert "proxy: not configured" in text

@pytest.mark.parametrize("name", ["list", "add", "remove", "token", "proxy"])
def test_add_command_name_is_rejected(name, commands, launcher_store, scripted_prompt):
    with pytest.raises(BuiltinEndpointError) as exc_info:
        commands.add(name, "https://mine.example.com")

    assert "command name" in exc_info.value.message
    assert exc_info.value.exit_code == 1
    assert not launcher_store.file_path.exists()
    assert scripted_prompt.questions == []
