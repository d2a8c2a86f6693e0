"""
End-to-end build tests

Tests the CLI pipeline: field definition YAML → source_load → styles_build
→ css_write → stylesheet on disk.
"""

import pytest
from argparse import Namespace
from pathlib import Path
import tempfile

from themecss.__main__ import env_check, source_load, styles_build, css_write
from themecss.models import ProgramState, pipeline


FIELDS_YAML = """
config:
  global:
    accent: "#0073aa"
    link_color: "#c00"
fields:
  - key: link_color
    output:
      - element: [a, "a:visited"]
        property: color
  - key: hero
    type: background
    value:
      background-color: "#eee"
    output:
      - element: .hero
  - key: border
    value: 2px
    output:
      - element: .card
        property: border-bottom
        value_pattern: "$ solid ACCENT"
        pattern_replace:
          ACCENT: accent
      - element: .editor-card
        property: border-bottom
        context: [editor]
"""


def state_make(inputdir: Path, outputdir: Path, renderContext: str = "frontend") -> ProgramState:
    options = Namespace(
        inputFile="fields.yaml",
        renderContext=renderContext,
        outputSubdir="css",
        verbosity=0,
    )
    return ProgramState.state_createFromNamespace(options=options, inputdir=inputdir, outputdir=outputdir)


class TestStylesheetBuild:
    """Test complete stylesheet builds"""

    def test_frontend_stylesheet(self):
        """Fields compile into one stylesheet file"""
        with tempfile.TemporaryDirectory() as tmpdir:
            inputdir = Path(tmpdir) / "in"
            outputdir = Path(tmpdir) / "out"
            inputdir.mkdir()
            (inputdir / "fields.yaml").write_text(FIELDS_YAML)

            state = pipeline(state_make(inputdir, outputdir), env_check, source_load, styles_build, css_write)

            assert state.buildResult['status'] is True
            assert state.buildResult['field_count'] == 3
            assert state.buildResult['media_query_count'] == 1

            output_file = outputdir / "css" / "styles.css"
            assert state.buildResult['output_file'] == str(output_file)
            assert output_file.read_text() == (
                "a,a:visited {\n    color: #c00;\n}\n"
                "\n"
                ".hero {\n    background: #eee;\n    background-color: #eee;\n}\n"
                "\n"
                ".card {\n    border-bottom: 2px solid #0073aa;\n}\n"
            )

    def test_editor_preview_stylesheet(self):
        """Only editor rules are built for the editor preview"""
        with tempfile.TemporaryDirectory() as tmpdir:
            inputdir = Path(tmpdir)
            (inputdir / "fields.yaml").write_text(FIELDS_YAML)

            state = pipeline(
                state_make(inputdir, inputdir / "out", "editorPreview"),
                env_check, source_load, styles_build, css_write,
            )

            css = Path(state.buildResult['output_file']).read_text()
            assert css == ".editor-card {\n    border-bottom: 2px;\n}\n"


class TestSourceLoad:
    """Test reading the field definition file"""

    def test_fields_and_config_loaded(self):
        """fields and config sections land in the state"""
        with tempfile.TemporaryDirectory() as tmpdir:
            inputdir = Path(tmpdir)
            (inputdir / "fields.yaml").write_text(FIELDS_YAML)

            state = source_load(env_check(state_make(inputdir, inputdir / "out")))

            assert [field['key'] for field in state.fieldDefinitions] == ['link_color', 'hero', 'border']
            assert state.configValues == {'global': {'accent': '#0073aa', 'link_color': '#c00'}}

    def test_wrong_structure_exits(self):
        """A file without a mapping at the top exits with status 1"""
        with tempfile.TemporaryDirectory() as tmpdir:
            inputdir = Path(tmpdir)
            (inputdir / "fields.yaml").write_text("- just\n- a list\n")

            with pytest.raises(SystemExit) as excinfo:
                source_load(env_check(state_make(inputdir, inputdir / "out")))
            assert excinfo.value.code == 1
