"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "schema-cli-args.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Argument generation configuration for schema-cli-args.
# Command line flags passed to describe or invoke take precedence over these values.
# Remove <OPTIONAL> placeholders you do not need.

# schema:
#   # Provide either an inline JSON Schema text or a schema path.
#   inline: "<OPTIONAL>"
#   path: "<OPTIONAL>"

generation:
  # Joins nested field names into flag names, e.g. user-name.
  separator: "-"
  # Nested objects deeper than this are passed as one JSON value.
  max_depth: 3
  # How arrays are read: repeated or json.
  # repeated: --tag a,b; arrays of objects: --item '{...}' --item '{...}'
  # json: --tag '["a", "b"]'
  array_handling: repeated
  # Fail when two schema paths map to the same flag.
  strict: true

# Prepended to generated command names as <prefix>:<command>.
command_prefix: ""

overrides:
  # Keys are flattened flag names without the leading dashes.
  # <flag-name>:
  #   type: "<OPTIONAL>"  # string | number | boolean | custom
  #   description: "<OPTIONAL>"
  #   short: "<OPTIONAL>"  # single character
  #   required: "<OPTIONAL>"  # true | false
  #   default: "<OPTIONAL>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
