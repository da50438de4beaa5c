"""Default configuration settings for the unity-nvim package."""

from __future__ import annotations

# --- Remote Control ---
# Positional fields: {0} file path, {1} line, {2} column (unused by default).
DEFAULT_ARGUMENT = "--server /tmp/nvim.unity --remote {0} --remote-send ':{1}<CR>'"

# --- Preference Keys ---
PREF_ARGUMENTS = "nvim_arguments"
PREF_EXTENSIONS = "nvim_userExtensions"
PREF_DEFAULT_APP = "kScriptsDefaultApp"
PREF_PROJECT_GENERATION_FLAG = "unity_project_generation_flag"

# --- Installations ---
INSTALLATION_NAME = "Nvim"
SUPPORTED_FILE_NAMES = (
    "nvim",
    "nvim.exe",
    "nvim-qt",
    "nvim-qt.exe",
    "neovim.app",
    "nvim.app",
)

# --- Extensions ---
# Mirrors Unity's EditorSettings.projectGenerationBuiltinExtensions
BUILTIN_EXTENSIONS = (
    "cs",
    "uxml",
    "uss",
    "shader",
    "compute",
    "cginc",
    "hlsl",
    "glslinc",
    "template",
    "raytrace",
)
# Mirrors Unity's default EditorSettings.projectGenerationUserExtensions
DEFAULT_USER_EXTENSIONS = ("txt", "xml", "fnt", "cd", "asmdef", "rsp", "asmref")
CUSTOM_EXTENSIONS = ("json", "asmdef", "log")

# Extensions whose changes require the solution to be regenerated
SCRIPT_EXTENSIONS = (".cs", ".asmdef", ".asmref", ".rsp")

# --- Unity ---
SYNC_SOLUTION_METHOD = "UnityEditor.SyncVS.SyncSolution"
UNITY_PATH_ENV = "UNITY_PATH"
