from typing import Optional

import streamlit as st
import streamlit.components.v1 as components
from streamlit.runtime.scriptrunner import get_script_run_ctx

from client_script import ClientScript, Position
from error_tracking import RequestContext
from utils import encode_js

# Components render in a same-origin iframe, so scripts are attached to the
# parent page. Files load in order before the inline scripts after them, and
# a script already on the page under the same key is only replaced when its
# code changed.
_PARENT_PAGE_LOADER = """(function (doc, tags) {
  var attr = "data-client-script";
  var first = doc.body.firstChild;
  function find(key) {
    var scripts = doc.getElementsByTagName("script");
    for (var i = 0; i < scripts.length; i++) {
      if (scripts[i].getAttribute(attr) === key) return scripts[i];
    }
    return null;
  }
  function insert(tag, el) {
    if (tag.position === "head") doc.head.appendChild(el);
    else if (tag.position === "begin") doc.body.insertBefore(el, first);
    else doc.body.appendChild(el);
  }
  function load(i) {
    if (i >= tags.length) return;
    var tag = tags[i];
    var existing = find(tag.key);
    if (existing && (tag.src || existing.text === tag.code)) return load(i + 1);
    if (existing) existing.parentNode.removeChild(existing);
    var el = doc.createElement("script");
    el.setAttribute(attr, tag.key);
    for (var name in tag.attrs) el.setAttribute(name, tag.attrs[name]);
    if (tag.src) {
      el.onload = el.onerror = function () { load(i + 1); };
      el.src = tag.src;
      insert(tag, el);
    } else {
      el.text = tag.code;
      insert(tag, el);
      load(i + 1);
    }
  }
  load(0);
})(window.parent.document, """


def streamlit_request_context() -> Optional[RequestContext]:
    """Session details of the current Streamlit run, or None outside one."""
    ctx = get_script_run_ctx()
    if ctx is None:
        return None
    return RequestContext(
        session_id=ctx.session_id,
        remote_addr=getattr(st.context, "ip_address", None),
        session=st.session_state.to_dict(),
    )


def parent_page_loader(client_script: ClientScript) -> str:
    """Markup that installs the registered scripts on the Streamlit page.

    Returns an empty string when nothing is registered.
    """
    tags = [
        {**tag, "position": position.value}
        for position in (Position.HEAD, Position.BEGIN, Position.END)
        for tag in client_script.script_tags(position)
    ]
    if not tags:
        return ""
    return f"<script>\n{_PARENT_PAGE_LOADER}{encode_js(tags, allow_raw=False)});\n</script>"


def render_client_scripts(client_script: ClientScript) -> None:
    """Install the registered scripts on the page, head scripts first.

    The zero-height component only hosts the loader; the scripts themselves
    run on the parent page, where browser errors are raised.
    """
    markup = parent_page_loader(client_script)
    if markup:
        components.html(markup, height=0)
