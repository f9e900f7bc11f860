"""HTML payload for the MathJax preview page."""

from typing import Sequence

from latexvector.schemas import DISPLAY_CHANNEL

MATHJAX_URL = "https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-svg.js"

_HEAD = r"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>LaTeX Vector</title>
    <script id="MathJax-script" async src="%(mathjax)s"></script>
    <script>
        function sendClick(idx) {
            var handlers = window.webkit && window.webkit.messageHandlers;
            if (handlers && handlers.%(channel)s) { handlers.%(channel)s.postMessage(idx); }
        }
        window.MathJax = { tex: { macros: { bm: ["\\boldsymbol{#1}", 1] } } };
    </script>
    <style>
        body { margin: 0; padding: 8px; background-color: transparent; font-family: -apple-system, system-ui, sans-serif; }
        .card {
            background: white; margin-bottom: 8px; padding: 8px;
            border-radius: 8px; box-shadow: 0 1px 3px rgba(0,0,0,0.05);
            cursor: pointer; border: 1px solid rgba(0,0,0,0.05);
            transition: transform 0.1s, border-color 0.1s;
        }
        .card:hover { transform: translateY(-1px); border-color: #007AFF; }
        .math-wrapper { overflow-x: auto; overflow-y: hidden; display: flex; justify-content: center; }
        .math-wrapper::-webkit-scrollbar { display: none; }
        svg { color: #333 !important; fill: #333 !important; }
    </style>
</head>
"""


def escape_formula(latex: str) -> str:
    # Only angle brackets: MathJax reads the TeX back from the text node.
    return latex.replace("<", "&lt;").replace(">", "&gt;")


def render_card(index: int, latex: str) -> str:
    return (
        f'<div class="card" onclick="sendClick({index})">\n'
        f'    <div class="math-wrapper">$$ {escape_formula(latex)} $$</div>\n'
        f'</div>'
    )


def display_html(formulas: Sequence[str]) -> str:
    items = "\n".join(render_card(index, latex) for index, latex in enumerate(formulas))
    head = _HEAD % {"mathjax": MATHJAX_URL, "channel": DISPLAY_CHANNEL}
    return f"{head}<body>{items}</body>\n</html>\n"
