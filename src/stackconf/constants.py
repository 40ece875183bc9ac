"""Constants for stackconf."""

# Environment selected when no --environment flag is given
DEFAULT_ENVIRONMENT = "common"

# Component directory used when no --path flag is given
DEFAULT_COMPONENT_PATH = "."

# Config files live at <component>/<CONFIG_SUBDIR>/<environment>.<ext>
CONFIG_SUBDIR = "config"

# Location given to subcomponents created on the fly; they are persisted
# inline in their parent's file so the value is never joined.
INLINE_LOCATION = "."

# Serialized field names
NAMESPACE_FIELD = "namespace"
INJECT_NAMESPACE_FIELD = "injectNamespace"
SETTINGS_FIELD = "config"
SUBCOMPONENTS_FIELD = "subcomponents"

# JSON indent for written files
JSON_INDENT = 2

# Environment variables
VERBOSITY_ENV = "STACKCONF_VERBOSITY"
ENVIRONMENT_ENV = "STACKCONF_ENVIRONMENT"
FORMAT_ENV = "STACKCONF_FORMAT"
COMPONENT_PATH_ENV = "STACKCONF_COMPONENT_PATH"
