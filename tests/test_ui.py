import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

# Ensure the repository root is on the Python path for module imports
sys.path.append(str(Path(__file__).resolve().parents[1]))

import ui
from client_script import ClientScript, Position


def test_request_context_outside_streamlit_run():
    with patch("ui.get_script_run_ctx", return_value=None):
        assert ui.streamlit_request_context() is None


def test_request_context_from_streamlit_run():
    session_state = MagicMock()
    session_state.to_dict.return_value = {"user_name": "ada"}
    fake_st = SimpleNamespace(
        context=SimpleNamespace(ip_address="10.0.0.1"), session_state=session_state
    )

    with patch("ui.get_script_run_ctx", return_value=SimpleNamespace(session_id="s-1")), patch(
        "ui.st", fake_st
    ):
        request = ui.streamlit_request_context()

    assert request.session_id == "s-1"
    assert request.remote_addr == "10.0.0.1"
    assert request.session == {"user_name": "ada"}


def test_render_client_scripts_targets_parent_page():
    scripts = ClientScript()
    scripts.register_script("user", "setUser();", Position.END)
    scripts.register_script_file(
        "https://cdn.example.com/a.js", html_options={"crossorigin": "anonymous"}
    )

    with patch("ui.components.html") as html:
        ui.render_client_scripts(scripts)

    markup = html.call_args.args[0]
    assert html.call_args.kwargs == {"height": 0}
    assert markup.startswith("<script>\n")
    assert markup.endswith("\n</script>")
    assert "})(window.parent.document, " in markup
    assert markup.count("</script>") == 1
    assert (
        '[{"key":"https://cdn.example.com/a.js","src":"https://cdn.example.com/a.js",'
        '"attrs":{"crossorigin":"anonymous"},"position":"head"},'
        '{"key":"user","code":"setUser();","attrs":{},"position":"end"}]);'
    ) in markup


def test_parent_page_loader_escapes_inline_code():
    scripts = ClientScript()
    scripts.register_script("user", 'Raven.setUserContext({"name":"js:</script>"});')

    markup = ui.parent_page_loader(scripts)

    assert markup.count("</script>") == 1
    assert '"code":"Raven.setUserContext({\\"name\\":\\"js:<\\/script>\\"});"' in markup


def test_render_client_scripts_skips_empty_page():
    with patch("ui.components.html") as html:
        ui.render_client_scripts(ClientScript())

    html.assert_not_called()
