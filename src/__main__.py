#!/usr/bin/env python3
"""
themecss - Output rules to stylesheets

Compiles a file of field definitions (value + output rules) into a
stylesheet, the way a theme customization layer emits its styles.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Input file (YAML):

    config:                 # saved values, grouped by config id
      global:
        accent: "#0073aa"
    fields:
      - key: accent
        output:
          - element: [a, "a:visited"]
            property: color
      - key: body_background
        type: background
        value:
          background-color: "#fff"

Usage:
    themecss inputdir/ outputdir/ --inputFile fields.yaml

Examples:
    # Frontend stylesheet
    themecss . output/ --inputFile fields.yaml

    # Editor preview styles, written to a subdirectory
    themecss . output/ --inputFile fields.yaml --renderContext editorPreview --outputSubdir editor/

    # Verbose output
    themecss . output/ --inputFile fields.yaml -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

import yaml
from chris_plugin import chris_plugin

from .config import appsettings
from .lib import OutputEngine, ConfigStore, styleTree_toCSS, __version__, LOG, state_connectToLogger
from .models import ProgramState, pipeline, RenderContext


# Define CLI arguments
parser = ArgumentParser(
    description="themecss - compile field output rules into a stylesheet",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Field definition YAML file (relative to inputdir)"
)

parser.add_argument(
    "--renderContext",
    default=appsettings.default_render_context,
    choices=[context.value for context in RenderContext],
    type=str,
    help="Render context the styles are built for",
)

parser.add_argument(
    "--outputSubdir",
    default=".",
    type=str,
    help="Subdirectory within outputdir for the stylesheet",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the field definition file
            - cssOutputdir: Created output directory path
            - envOK: True if environment is valid

    Exits:
        1 if the input file is not found
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    state.cssOutputdir = state.outputdir / state.outputSubdir
    state.cssOutputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.cssOutputdir}", level=2)

    state.envOK = True
    return state


def source_load(inputstate: ProgramState) -> ProgramState:
    """
    Read field definitions and saved configuration values.

    Returns:
        ProgramState with added fields:
            - fieldDefinitions: List of field definition mappings
            - configValues: Mapping of config id -> saved values

    Exits:
        1 if the file can't be read or has the wrong structure
    """
    state = inputstate.copy()

    LOG("Reading field definitions...", level=1)

    try:
        source = yaml.safe_load(state.inputSourceFile.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    if not isinstance(source, dict):
        print("Error: Input file must contain a mapping with a 'fields' list", file=sys.stderr)
        sys.exit(1)

    fields = source.get('fields') or []
    config = source.get('config') or {}
    if not isinstance(fields, list) or not isinstance(config, dict):
        print("Error: 'fields' must be a list and 'config' a mapping", file=sys.stderr)
        sys.exit(1)

    state.fieldDefinitions = [definition for definition in fields if isinstance(definition, dict)]
    state.configValues = config
    LOG(f"Read {len(state.fieldDefinitions)} field(s) from {state.inputSourceFile.name}", level=2)
    return state


def styles_build(inputstate: ProgramState) -> ProgramState:
    """
    Build the combined style tree of all fields.

    Returns:
        ProgramState with added field:
            - styleTree: StyleTree of all fields

    Exits:
        1 if no field definitions were loaded or the build fails
    """
    state = inputstate.copy()

    LOG(f"Building styles for {state.renderContext}...", level=1)

    if state.fieldDefinitions is None:
        print("Error: No field definitions available", file=sys.stderr)
        sys.exit(1)

    try:
        store = ConfigStore(state.configValues)
        engine = OutputEngine(lookup=store.configValue_get)
        state.styleTree = engine.fields_build(state.fieldDefinitions, store, state.renderContext)
    except Exception as e:
        print(f"Build error: {e}", file=sys.stderr)
        if state.verbosity >= 3:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    return state


def css_write(inputstate: ProgramState) -> ProgramState:
    """
    Render the style tree and write the stylesheet.

    Returns:
        ProgramState with added field:
            - buildResult: Dict containing status, output_file, field_count,
              media_query_count
    """
    state = inputstate.copy()

    css = styleTree_toCSS(state.styleTree)
    output_file = state.cssOutputdir / appsettings.css_filename
    output_file.write_text(css, encoding="utf-8")
    LOG(f"Wrote {output_file}", level=2)

    state.buildResult = {
        'status': True,
        'output_file': str(output_file),
        'field_count': len(state.fieldDefinitions or []),
        'media_query_count': len(state.styleTree),
    }
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display build results.

    Exits:
        1 if buildResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.buildResult:
        print("Error: Build failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Stylesheet built!", level=1)
    LOG(f"  Output: {state.buildResult['output_file']}", level=1)
    LOG(f"  Fields: {state.buildResult['field_count']}", level=1)
    LOG(f"  Media queries: {state.buildResult['media_query_count']}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="themecss - output rules to stylesheets",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - compile field definitions into a stylesheet.

    Orchestrates the pipeline:
        1. env_check: Validate paths and environment
        2. source_load: Read field definitions and saved values
        3. styles_build: Build the combined style tree
        4. css_write: Render and write the stylesheet
        5. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, source_load, styles_build, css_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
