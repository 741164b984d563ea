"""User-facing message strings and help links.

Kept in one place so the error taxonomy and the CLI render the same text.
"""

from __future__ import annotations

TF_EXEC_FAILED = "Execution of the TFVC command line failed unexpectedly."
INVALID_STATE = "The TFVC SCMProvider is in an invalid state for this action."
ARGUMENT_REQUIRED = "Argument is required: {name}"

NO_WORKSPACE_MAPPINGS = (
    "Could not find a workspace with mappings (e.g., not a TFVC repository, "
    "wrong version of TF is being used)."
)
NOT_A_TFVC_REPOSITORY = (
    "The open folder is not a TFVC repository. "
    "Please check the folder location and try again."
)
NOT_AN_ENU_TF_COMMAND_LINE = (
    "It appears you have configured a non-English version of the TF executable. "
    "Please ensure an English version is properly configured."
)
TOKEN_NOT_ALL_SCOPES = (
    "The personal access token provided does not have All Scopes. "
    "All Scopes is required for TFVC support."
)
TF_LOCATION_MISSING = (
    "The path to the TFVC command line (including filename) was not found in the "
    "user settings. Please set this value (tfvc.location) and try again."
)
TF_MISSING = (
    "Unable to find the TF executable. Please ensure TF is installed and the path "
    "specified contains the filename."
)
TF_INITIALIZE_FAILURE = (
    "Unable to initialize the TF executable. "
    "Please verify the installation of Java and ensure it is in the PATH."
)
TF_VERSION_WARNING = (
    "The configured version of TF does not meet the minimum version. You may run "
    "into errors or limitations with certain commands until you upgrade. "
    "Minimum version: "
)
NO_ITEMS_MATCH = "No items match any of the file paths provided."

MORE_DETAILS = "More Details..."
VS2015_UPDATE = "Get Latest VS 2015 Update"

VS2015_UPDATE_URL = "https://msdn.microsoft.com/en-us/library/mt752379.aspx"
NON_ENU_TF_EXE_URL = (
    "https://github.com/Microsoft/vsts-vscode/blob/master/TFVC_README.md"
    "#i-received-the-it-appears-you-have-configured-a-non-english-version-of-the-tf-"
    "executable-please-ensure-an-english-version-is-properly-configured-error-message-"
    "after-configuring-tfexe-how-can-i-get-the-extension-to-work-properly"
)
