"""Starter node sets used when a project is created from a template."""

from __future__ import annotations

from projsync.errors import ValidationError
from projsync.models import FileNode, Node
from projsync.util.ids import new_node_id

_APP_JS = """import React from 'react';
import './App.css';

function App() {
  return (
    <div className="App">
      <header className="App-header">
        <h1>Hello from your new project!</h1>
        <p>Start editing your React components here.</p>
      </header>
    </div>
  );
}

export default App;"""

_APP_CSS = """.App {
  text-align: center;
}

.App-header {
  background-color: #282c34;
  padding: 20px;
  color: white;
  min-height: 100vh;
  display: flex;
  flex-direction: column;
  align-items: center;
  justify-content: center;
}"""

_INDEX_JS = """import React from 'react';
import ReactDOM from 'react-dom/client';
import App from './App';

const root = ReactDOM.createRoot(document.getElementById('root'));
root.render(
  <React.StrictMode>
    <App />
  </React.StrictMode>
);"""

TEMPLATES: dict[str, tuple[tuple[str, str], ...]] = {
    "blank": (),
    "react": (
        ("App.js", _APP_JS),
        ("App.css", _APP_CSS),
        ("index.js", _INDEX_JS),
    ),
}

DEFAULT_TEMPLATE = "react"


def build_template(name: str) -> tuple[Node, ...]:
    """Return fresh root-level nodes for template ``name`` (new ids each call)."""
    try:
        entries = TEMPLATES[name]
    except KeyError as exc:
        raise ValidationError(
            f"Unknown template: {name}", details={"templates": sorted(TEMPLATES)}
        ) from exc
    return tuple(
        FileNode(id=new_node_id(), name=file_name, content=content)
        for file_name, content in entries
    )
