"""Shared fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_ai_refactor_logger():
    """Undo CLI logging setup so handlers don't outlive a CliRunner's streams."""
    yield
    logger = logging.getLogger("ai_refactor")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def sample_project(tmp_path):
    """A small JS project with internal and external imports and no tests."""
    (tmp_path / "package.json").write_text(
        '{"name": "webapp", "dependencies": {"react": "^18", "lodash": "^4"}}'
    )
    (tmp_path / "README.md").write_text("# WebApp\n")

    src = tmp_path / "src"
    src.mkdir()
    (src / "App.jsx").write_text(
        "import React, { useState } from 'react';\n"
        "import Header from './Header';\n"
        "import { api } from '../lib/api';\n"
        "\n"
        "export default function App() {\n"
        "  const [open, setOpen] = useState(false);\n"
        "  if (open && api) {\n"
        "    return <Header />;\n"
        "  }\n"
        "  return null;\n"
        "}\n"
    )
    (src / "Header.jsx").write_text(
        "import React from 'react';\n"
        "import debounce from 'lodash/debounce';\n"
        "export const Header = () => null;\n"
    )
    (src / "styles.css").write_text("body { margin: 0; }\n")

    lib = tmp_path / "lib"
    lib.mkdir()
    (lib / "api.js").write_text(
        "import axios from 'axios';\n"
        "import React from 'react';\n"
        "export const api = axios.create();\n"
    )

    # Ignored by default
    nm = tmp_path / "node_modules" / "react"
    nm.mkdir(parents=True)
    (nm / "index.js").write_text("module.exports = {};\n")
    dist = tmp_path / "dist"
    dist.mkdir()
    (dist / "bundle.js").write_text("console.log('bundle');\n")

    return tmp_path
