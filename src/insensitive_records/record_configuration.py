import json
from pathlib import Path
from typing import Annotated, Any

from humps import camelize
from pydantic import BaseModel, ConfigDict, Field


def to_camel(string):
    return camelize(string)


class RecordConfiguration(BaseModel):
    """Settings for turning rows into records."""

    snapshot_iteration: Annotated[
        bool,
        Field(
            title="Snapshot iteration",
            description=(
                "If set, records iterate over a copy of their entries taken when "
                "iteration starts. Otherwise iteration fails fast when the record is "
                "added to or removed from while it is being iterated"
            ),
        ),
    ] = False
    log_data_issues: Annotated[
        bool,
        Field(
            title="Log data issues",
            description=(
                "Log duplicate column names and surplus values at the DATA_ISSUES level"
            ),
        ),
    ] = True
    delimiter: Annotated[
        str,
        Field(
            description="Field delimiter for delimited text files. Use \\t for TSV",
            min_length=1,
            max_length=1,
        ),
    ] = ","
    rest_value: Annotated[
        Any,
        Field(
            title="Rest value",
            description="Value given to columns missing from a short line",
        ),
    ] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


def load_configuration(config_path_str) -> RecordConfiguration:
    config_path = Path(config_path_str)
    with open(config_path) as config_file:
        return RecordConfiguration.model_validate(json.load(config_file))
