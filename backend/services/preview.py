"""
Share-page generator.

Renders a stored component as a standalone HTML page. React, ReactDOM and
Babel standalone load from CDN; the component source is compiled in the
browser, so the page shows exactly what the editor's live preview shows.
"""

from __future__ import annotations

import json

from engine.jsx.types import CompiledComponent, CompileError


def render_share_page(compiled: CompiledComponent, title: str) -> str:
    """
    Render a complete HTML page for a compiled component.

    Args:
        compiled: output of JSXCompiler.compile() (source + component name)
        title: page title

    Returns:
        Complete HTML string
    """
    source_json = _script_json(compiled.code)
    name_json = _script_json(compiled.name)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{_escape_html(title)}</title>
<script crossorigin src="https://unpkg.com/react@18/umd/react.production.min.js"></script>
<script crossorigin src="https://unpkg.com/react-dom@18/umd/react-dom.production.min.js"></script>
<script crossorigin src="https://unpkg.com/@babel/standalone/babel.min.js"></script>
<style>
{SHARE_CSS}
</style>
</head>
<body>
<div id="root"></div>
<pre id="error" hidden></pre>
<script>
const SOURCE = {source_json};
const COMPONENT_NAME = {name_json};

{BOOTSTRAP_JS}
</script>
</body>
</html>"""


def render_error_page(title: str, error: CompileError | None = None, message: str | None = None) -> str:
    """Plain page shown when a component is missing or no longer compiles."""
    detail = message or (error.message if error else "Unknown error")
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<title>{_escape_html(title)}</title>
<style>
{SHARE_CSS}
</style>
</head>
<body>
<h1>{_escape_html(title)}</h1>
<pre id="error">{_escape_html(detail)}</pre>
</body>
</html>"""


def _escape_html(text: str) -> str:
    """HTML-escape text for safe embedding."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")


def _script_json(value: str) -> str:
    """JSON literal that cannot close the surrounding <script> element."""
    return json.dumps(value, ensure_ascii=False).replace("</", "<\\/").replace("<!--", "<\\!--")


# ─────────────────────────────────────────────────────────────────────────────
# Page assets
# ─────────────────────────────────────────────────────────────────────────────

SHARE_CSS = """
body {
  margin: 0;
  padding: 24px;
  font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
  color: #2D2D2A;
  background: #FFFFFF;
}

#error {
  padding: 12px 16px;
  border-radius: 6px;
  background: #FDECEC;
  color: #9B1C1C;
  white-space: pre-wrap;
}
"""

# Module syntax is stripped so the source can run inside new Function().
BOOTSTRAP_JS = """
function showError(message) {
  const el = document.getElementById('error');
  el.textContent = message;
  el.hidden = false;
}

try {
  const body = SOURCE
    .replace(/^\\s*import\\s.*$/gm, '')
    .replace(/^(\\s*)export\\s+default\\s+/gm, '$1')
    .replace(/^(\\s*)export\\s+/gm, '$1');
  const compiled = Babel.transform(body, { presets: ['react'], filename: 'component.jsx' }).code;
  const factory = new Function(
    'React',
    'const { useState, useEffect, useCallback, useMemo, useRef } = React;\\n' +
      compiled + '\\nreturn ' + COMPONENT_NAME + ';'
  );
  const Component = factory(React);
  if (typeof Component !== 'function') {
    throw new Error('Compiled code did not produce a valid React component');
  }
  ReactDOM.createRoot(document.getElementById('root')).render(React.createElement(Component));
} catch (err) {
  showError('Compilation failed: ' + err.message);
}
"""
