from __future__ import annotations

from pywoopra import _script
from pywoopra.models.event import TrackedEvent


def test_js_literal_escapes_script_close() -> None:
    literal = _script.js_literal({"bio": "</script><script>alert(1)</script>"})

    assert "</script>" not in literal
    assert literal == '{"bio": "<\\/script><script>alert(1)<\\/script>"}'


def test_render_track_keeps_name_and_properties() -> None:
    statement = _script.render_track(TrackedEvent(name="signup", properties={"plan": "pro", "seats": 3}))

    assert statement == 'woopra.track("signup", {"plan": "pro", "seats": 3});'


def test_render_widget_places_flush_after_loader() -> None:
    markup = _script.render_widget(['woopra.config({"domain": "x.com"});'])

    assert markup.startswith("\n<!-- Woopra code starts here -->\n<script>\n(function(){")
    assert markup.index('})("woopra");') < markup.index("woopra.config(")
    assert markup.endswith("</script>\n<!-- Woopra code ends here -->\n")


def test_script_buffer_collects_and_clears() -> None:
    buffer = _script.ScriptBuffer()
    buffer.write("a")
    buffer.write("b")

    assert buffer.getvalue() == "ab"
    buffer.clear()
    assert buffer.getvalue() == ""


def test_wrap_script_joins_statements() -> None:
    assert _script.wrap_script("a;", "b;") == "<script>\na;\nb;\n</script>\n"
