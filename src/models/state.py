"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the CLI pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the build progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, renderContext, outputSubdir
        - env_check: inputSourceFile, cssOutputdir, envOK
        - source_load: fieldDefinitions, configValues
        - styles_build: styleTree
        - css_write: buildResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the field definition file
        outputdir: Base output directory
        verbosity: Logging verbosity level (1-3)
        inputFile: Field definition YAML file (relative to inputdir)
        renderContext: "frontend" or "editorPreview"
        outputSubdir: Subdirectory within outputdir for output
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the field definition file
        cssOutputdir: Final output directory (outputdir + outputSubdir)
        fieldDefinitions: Field definitions read from the input file
        configValues: Stored configuration values read from the input file
        styleTree: Combined style tree of all fields
        buildResult: Build results (output_file, field_count, rule_count, status)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    renderContext: str = field(default="frontend")
    outputSubdir: str = field(default=".")

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    cssOutputdir: Path = field(default=Path("/"))
    fieldDefinitions: Optional[List[Dict[str, Any]]] = field(default=None)
    configValues: Optional[Dict[str, Any]] = field(default=None)
    styleTree: Optional[Any] = field(default=None)  # StyleTree at runtime
    buildResult: Optional[Dict] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (inputFile, renderContext, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for build output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        # Only keep options that are ProgramState fields
        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_load,
            styles_build,
            css_write,
            results_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
