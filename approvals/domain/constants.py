"""
Domain Constants: engine-wide constants.

File naming policy, environment variable names and CI indicators.
"""

# =============================================================================
# Artifact File Naming
# =============================================================================
# <stem>.approved.<ext>  human-maintained baseline
# <stem>.received.<ext>  engine-written, deleted on pass

APPROVED_TOKEN = "approved"
RECEIVED_TOKEN = "received"
DEFAULT_EXTENSION = "txt"

# Probe key used when asking a front-loaded reporter whether it can run here
DEFAULT_PROBE_KEY = "default.txt"

# Extensions treated as text by ExistingFileWriter (line endings normalizable)
TEXT_EXTENSIONS = frozenset({
    "txt", "md", "csv", "tsv", "json", "xml", "html", "htm",
    "yaml", "yml", "ini", "cfg", "toml", "log", "py", "sql",
})

# =============================================================================
# Package Identity
# =============================================================================
# Frames from these modules are never exposed to the resolver or namer

PACKAGE_NAME = "approvals"

# =============================================================================
# Configuration Sources
# =============================================================================

CONFIG_FILENAME = "approvals.yaml"
DIFF_TOOLS_FILENAME = "diff_tools.yaml"

ENV_CONFIG_PATH = "APPROVALS_CONFIG"
ENV_DEFAULT_REPORTERS = "APPROVALS_DEFAULT_REPORTERS"
ENV_FRONT_LOADED_REPORTER = "APPROVALS_FRONT_LOADED_REPORTER"
ENV_NORMALIZE_LINE_ENDINGS = "APPROVALS_NORMALIZE_LINE_ENDINGS"

# =============================================================================
# CI Detection
# =============================================================================

CI_INDICATORS = (
    "CI",  # generic, used by GitHub Actions, GitLab CI, etc.
    "GITHUB_ACTIONS",
    "GITLAB_CI",
    "JENKINS_URL",
    "CIRCLECI",
    "TRAVIS",
    "BUILDKITE",
    "TF_BUILD",  # Azure Pipelines
    "CODEBUILD_BUILD_ID",  # AWS CodeBuild
    "TEAMCITY_VERSION",
)

# =============================================================================
# Review CLI
# =============================================================================

APPROVE_LOCK_FILENAME = ".approvals.lock"
APPROVE_LOCK_TIMEOUT = 10  # seconds
