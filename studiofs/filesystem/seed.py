"""
Default Project Module

The static project a virtual workspace starts from.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, List, Tuple

from .node import ROOT_ID, new_file
from .tree import NodeTree
from studiofs.core.config_loader import get_config


INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Live Preview</title>
    <style>
      body {
        font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Helvetica, Arial, sans-serif;
        background: #121212;
        color: white;
        display: flex;
        justify-content: center;
        align-items: center;
        height: 100vh;
        margin: 0;
      }
      .card {
        background: #1e1e1e;
        padding: 2rem;
        border-radius: 12px;
        border: 1px solid #333;
        text-align: center;
        max-width: 300px;
      }
    </style>
</head>
<body>
    <div class="card">
      <h1>Hello World</h1>
      <p>Edit files to see changes in the preview.</p>
      <button id="counter">Count: 0</button>
    </div>
    <script>
      let count = 0;
      const btn = document.getElementById('counter');
      btn.addEventListener('click', () => {
        count++;
        btn.innerText = 'Count: ' + count;
      });
    </script>
</body>
</html>"""

STYLE_CSS = """/* Stylesheet picked up by the preview */
body {
}"""

SCRIPT_JS = """// Script picked up by the preview
console.log('Script loaded');"""

README_MD = """# My Project

Welcome to the workspace.

## Features
- Integrated terminal
- Native folder editing
- Virtual projects
"""

DEFAULT_FILES: List[Tuple[str, str]] = [
    ('index.html', INDEX_HTML),
    ('style.css', STYLE_CSS),
    ('script.js', SCRIPT_JS),
    ('README.md', README_MD),
]


def default_project(name: Optional[str] = None) -> NodeTree:
    """
    Build the seeded virtual project.

    Args:
        name: Root folder name (default from configuration)

    Returns:
        A tree holding the default files under an open root
    """
    tree = NodeTree(root_name=name or get_config().workspace.default_project_name)
    for file_name, content in DEFAULT_FILES:
        tree.add_child(ROOT_ID, new_file(ROOT_ID, file_name, content=content))
    return tree
