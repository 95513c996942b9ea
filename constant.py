from utils import JsExpression

PAGE_TITLE = "Sentry Reporting Demo"

# Inline script ids registered with the page's ClientScript
JS_INIT_SCRIPT_ID = "sentry-javascript-init"
JS_USER_SCRIPT_ID = "sentry-javascript-user"

# Global object exposed by the browser reporting library
JS_CLIENT_OBJECT = "Raven"

# Records which scripts were on the page when an event was reported
DEFAULT_DATA_CALLBACK = JsExpression(
    """function(data) {
    data.extra.source_scripts = [];
    data.extra.referenced_scripts = [];
    var scripts = document.getElementsByTagName("script");
    for (var i=0;i<scripts.length;i++) {
        if (scripts[i].src)
            data.extra.referenced_scripts.push(scripts[i].src);
        else
            data.extra.source_scripts.push(scripts[i].innerHTML);
    }
}"""
)

UI_CSS = """
<style>
    .main-header {
        text-align: center;
        padding: 1rem 0;
        background: linear-gradient(90deg, #362d59, #e1567c);
        -webkit-background-clip: text;
        -webkit-text-fill-color: transparent;
        font-size: 2.5rem;
        font-weight: bold;
    }
    .event-link {
        border-left: 4px solid #362d59;
        padding-left: 1rem;
        margin: 1rem 0;
    }
</style>
"""
