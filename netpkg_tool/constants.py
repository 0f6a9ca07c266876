"""Global constants for netpkg-tool"""

from enum import IntEnum

# Tool identification
APP_NAME = "netpkg-tool"
PROJECT_URL = "https://github.com/phil-harmoniq/netpkg-tool"

# Display
RULE_WIDTH = 64
LOG_FORMAT = "%(message)s"

# Configuration directory (relative to $HOME)
CONFIG_DIR_NAME = ".netpkg-tool"
ERROR_LOG_FILE = "error.log"
SETTINGS_FILE = "config.yaml"
VERBOSE_LOG_PLACEHOLDER = "[Error message was written to verbose output]"

# Project manifests
DEFAULT_MANIFEST_EXTENSIONS = (".csproj",)
TARGET_FRAMEWORK_PATH = ("PropertyGroup", "TargetFramework")

# Toolchain defaults
DEFAULT_DOTNET = "dotnet"
DEFAULT_APPIMAGETOOL = "appimagetool"
DEFAULT_TEMP_ROOT = "/tmp"
DEFAULT_RUNTIME_IDENTIFIER = "linux-x64"
DEFAULT_BUILD_CONFIGURATION = "Release"
STAGING_SUFFIX = ".temp"

# Exit code reported for a program that could not be started
COMMAND_NOT_FOUND = 127

# Environment variables
ENV_HOME = "HOME"
ENV_DOTNET = "NETPKG_TOOL_DOTNET"
ENV_APPIMAGETOOL = "NETPKG_TOOL_APPIMAGETOOL"
ENV_TRANSFER = "NETPKG_TOOL_TRANSFER"
ENV_TEMP_ROOT = "NETPKG_TOOL_TEMP_ROOT"


class ExitCode(IntEnum):
    """Process exit codes, one per failure point"""
    SUCCESS = 0
    MISSING_ARGUMENTS = 1
    INVALID_DESTINATION = 2
    INVALID_PROJECT = 3
    INVALID_SETTINGS = 4
    LOG_CLEAR_FAILED = 5
    NO_MANIFEST = 10
    AMBIGUOUS_MANIFEST = 11
    UNREADABLE_MANIFEST = 12
    RESTORE_FAILED = 20
    COMPILE_FAILED = 21
    TRANSFER_FAILED = 22
    PACKAGE_FAILED = 23
    CLEANUP_FAILED = 24
    INTERRUPTED = 130
