import sys
from pathlib import Path

# Ensure the repository root is on the Python path for module imports
sys.path.append(str(Path(__file__).resolve().parents[1]))

from client_script import ClientScript, Position


def test_script_file_registered_once():
    scripts = ClientScript()
    scripts.register_script_file("https://cdn.example.com/a.js")
    scripts.register_script_file("https://cdn.example.com/a.js", Position.END)

    assert scripts.script_files == ["https://cdn.example.com/a.js"]
    assert scripts.render(Position.END) == ""


def test_render_files_before_inline_scripts():
    scripts = ClientScript()
    scripts.register_script("init", "init();", Position.HEAD)
    scripts.register_script_file(
        "https://cdn.example.com/a.js", Position.HEAD, {"crossorigin": "anonymous"}
    )

    assert scripts.render(Position.HEAD) == (
        '<script src="https://cdn.example.com/a.js" crossorigin="anonymous"></script>\n'
        "<script>\ninit();\n</script>"
    )


def test_reregistering_script_replaces_code_and_position():
    scripts = ClientScript()
    scripts.register_script("user", "first();", Position.HEAD)
    scripts.register_script("user", "second();")

    assert scripts.render(Position.HEAD) == ""
    assert scripts.render(Position.END) == "<script>\nsecond();\n</script>"
    assert scripts.get_script("user") == "second();"


def test_attributes_are_escaped():
    scripts = ClientScript()
    scripts.register_script_file('https://cdn.example.com/a.js?x="1"&y=2')

    assert 'src="https://cdn.example.com/a.js?x=&quot;1&quot;&amp;y=2"' in scripts.render(
        Position.HEAD
    )


def test_reset_clears_registrations():
    scripts = ClientScript()
    scripts.register_script_file("https://cdn.example.com/a.js")
    scripts.register_script("init", "init();")
    scripts.reset()

    assert not scripts.is_script_file_registered("https://cdn.example.com/a.js")
    assert not scripts.is_script_registered("init")
    assert scripts.get_script("init") is None


def test_script_tags_describe_position_in_order():
    scripts = ClientScript()
    scripts.register_script("init", "init();", Position.HEAD)
    scripts.register_script_file("https://cdn.example.com/a.js", Position.HEAD, {"defer": "defer"})
    scripts.register_script("later", "later();")

    assert scripts.script_tags(Position.HEAD) == [
        {
            "key": "https://cdn.example.com/a.js",
            "src": "https://cdn.example.com/a.js",
            "attrs": {"defer": "defer"},
        },
        {"key": "init", "code": "init();", "attrs": {}},
    ]
    assert scripts.script_tags(Position.BEGIN) == []
