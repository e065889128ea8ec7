"""Static catalogs and template constants for the WebCore Go template."""

from __future__ import annotations

from .models import Feature, LibraryOption

TEMPLATE_REPO_URL = "https://github.com/semanggilab/webcore-go-template.git"
DEFAULT_MODULE_NAME = "github.com/semanggilab/project1"
DEFAULT_PROJECT_DIR = "./webcore"
DEFAULT_FOLDER_NAME = "mymodule"

# Placeholders shipped by the template
TEMPLATE_APP_MODULE = "github.com/semanggilab/webcorego-template-app"
TEMPLATE_MOD_MODULE = "github.com/semanggilab/webcorego-template-mod"
PLACEHOLDER_MODULE_CALL = "dummy.NewModule()"
PLACEHOLDER_WORKSPACE_ENTRY = "./modules/dummy"

CORE_IMPORT_PATH = "github.com/webcore-go/webcore/app/core"

# Lock files kept with the placeholder module when moving it into webcore/app
MODULE_LOCK_FILES = ("go.mod", "go.sum")

# Files the installer rewrites, relative to the project directory
TEMPLATE_ARTIFACTS = {
    "webcore/go.mod": "Root module descriptor",
    "webcore/main.go": "Main entry file",
    "webcore/deps/libraries.go": "Library manifest",
    "webcore/deps/packages.go": "Module registration",
    "config.yaml.example": "Example application config",
    "access.yaml.example": "Example access config",
    "modules/dummy": "Placeholder module",
    "go.work": "Workspace descriptor (mono-repo)",
}

AVAILABLE_LIBRARIES: list[LibraryOption] = [
    LibraryOption(
        name="database:postgres",
        description="PostgreSQL",
        package_path="github.com/webcore-go/lib-postgres",
        enabled=True,
    ),
    LibraryOption(
        name="database:mysql",
        description="MySQL",
        package_path="github.com/webcore-go/lib-mysql",
    ),
    # Shares its package with database:mysql
    LibraryOption(
        name="database:sqlite",
        description="SQLite",
        package_path="github.com/webcore-go/lib-mysql",
    ),
    LibraryOption(
        name="database:mongodb",
        description="MongoDB",
        package_path="github.com/webcore-go/lib-mongo",
    ),
    LibraryOption(
        name="redis",
        description="Redis",
        package_path="github.com/webcore-go/lib-redis",
    ),
    LibraryOption(
        name="kafka:producer",
        description="Kafka Producer",
        package_path="github.com/webcore-go/lib-kafka",
        loader_name="KafkaProducerLoader",
    ),
    LibraryOption(
        name="kafka:consumer",
        description="Kafka Consumer",
        package_path="github.com/webcore-go/lib-kafka",
        loader_name="KafkaConsumerLoader",
    ),
    LibraryOption(
        name="pubsub",
        description="Google Pub/Sub",
        package_path="github.com/webcore-go/lib-pubsub",
        loader_name="PubSubLoader",
    ),
    LibraryOption(
        name="authstorage:yaml",
        description="Authentication Storage: YAML",
        package_path="github.com/webcore-go/webcore/lib/authstore/yaml",
        enabled=True,
    ),
    LibraryOption(
        name="authentication:apikey",
        description="Authentication: API key",
        package_path="github.com/webcore-go/webcore/lib/auth/apikey",
        loader_name="ApiKeyLoader",
        enabled=True,
    ),
    LibraryOption(
        name="authentication:basic",
        description="Authentication: Basic",
        package_path="github.com/webcore-go/webcore/lib/auth/basic",
        loader_name="BasicAuthLoader",
    ),
]

AVAILABLE_FEATURES: list[Feature] = [
    Feature(
        name="specific config",
        description="Additional Config",
        folders=["config"],
    ),
    Feature(
        name="database repository",
        description="Service and Repository",
        folders=["service", "repository"],
    ),
    Feature(
        name="http request handler",
        description="HTTP Request Handler",
        folders=["handler"],
    ),
]


def default_libraries() -> list[LibraryOption]:
    """Libraries selected when the user accepts the defaults."""
    return [lib for lib in AVAILABLE_LIBRARIES if lib.enabled]


def default_features() -> list[Feature]:
    """Features selected when the user accepts the defaults."""
    return [feature for feature in AVAILABLE_FEATURES if feature.enabled]


def select_libraries(names: list[str]) -> list[LibraryOption]:
    """Resolve library keys against the catalog, keeping catalog order.

    Raises:
        KeyError: If a name is not in the catalog
    """
    known = {lib.name for lib in AVAILABLE_LIBRARIES}
    unknown = [name for name in names if name not in known]
    if unknown:
        raise KeyError(", ".join(unknown))
    wanted = set(names)
    return [lib for lib in AVAILABLE_LIBRARIES if lib.name in wanted]


def select_features(names: list[str]) -> list[Feature]:
    """Resolve feature names against the catalog, keeping catalog order.

    Raises:
        KeyError: If a name is not in the catalog
    """
    known = {feature.name for feature in AVAILABLE_FEATURES}
    unknown = [name for name in names if name not in known]
    if unknown:
        raise KeyError(", ".join(unknown))
    wanted = set(names)
    return [feature for feature in AVAILABLE_FEATURES if feature.name in wanted]
