"""Core constants used across SuiteBuild modules.

This module centralizes project layout defaults and SuiteScript literals.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_SOURCE_DIR = Path("typescript/src")
DEFAULT_SCRIPTS_DIR = Path("src/FileCabinet/SuiteScripts")
DEFAULT_OBJECTS_DIR = Path("src/Objects")
DEFAULT_SNAPSHOT_FILE = Path("automation/.file-hashes.json")
DEFAULT_SOURCE_EXTENSION = ".ts"
DEFAULT_BUILD_COMMAND = "suitebuild build"
DEFAULT_DEPLOY_COMMAND = "suitecloud project:deploy"
DEFAULT_ANNOTATION_READER = "naive"
DEFAULT_LOG_FORMAT = "console"
SUPPORTED_LOG_FORMATS = ("console", "json")
HASH_ALGORITHM = "sha256"
SNAPSHOT_LOCK_TIMEOUT_SECONDS = 30.0
SNAPSHOT_LOCK_SUFFIX = ".lock"
BUILD_SPEC_VERSION = 1

IDENTITY_KEY = "scriptid"
SCRIPT_ID_PREFIX = "customscript_"
DEPLOYMENT_ID_PREFIX = "customdeploy_"
MODULE_FILE_EXTENSION = ".js"
MANIFEST_FILE_EXTENSION = ".xml"
FILE_CABINET_SCRIPT_ROOT = "/SuiteScripts"

CAPABILITY_KEYS = ("NApiVersion", "NScriptType", "NModuleScope")
MISSING_CAPABILITY_VALUE = "undefined"
DEFAULT_MODULE_DESCRIPTION = "Auto-generated from TypeScript"
MODULE_DEPENDENCIES = (("N/ui/dialog", "dialog"), ("N/log", "log"))
MODULE_ENTRY_POINT = "pageInit"

DEFAULT_SCRIPT_NAME = "Auto-generated Script"
DEFAULT_MANIFEST_DESCRIPTION = "Generated from TypeScript"
DEFAULT_RECORD_TYPE = "SALESORDER"
DEFAULT_EXECUTION_CONTEXT = "USERINTERFACE"
DEFAULT_LOG_LEVEL = "DEBUG"
DEFAULT_DEPLOYMENT_STATUS = "RELEASED"
