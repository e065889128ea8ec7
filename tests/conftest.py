"""Shared fixtures: a miniature copy of the WebCore Go template."""

import tempfile
from pathlib import Path

import pytest

TEMPLATE_FILES = {
    "webcore/go.mod": """\
module github.com/semanggilab/webcorego-template-app

go 1.25.0

require github.com/webcore-go/webcore v0.3.0
""",
    "webcore/main.go": """\
package main

import (
	"github.com/semanggilab/webcorego-template-app/deps"
	"github.com/webcore-go/webcore/app"
)

func main() {
	app.Run(deps.APP_PACKAGES, deps.APP_LIBRARIES)
}
""",
    "webcore/deps/libraries.go": """\
package deps

import (
	"github.com/webcore-go/webcore/app/core"
	postgres "github.com/webcore-go/lib-postgres"
)

var APP_LIBRARIES = map[string]core.LibraryLoader{
	"database:postgres": &postgres.PostgresLoader{},
}
""",
    "webcore/deps/packages.go": """\
package deps

import (
	"github.com/webcore-go/webcore/app/core"
	dummy "github.com/semanggilab/webcorego-template-mod"
)

var APP_PACKAGES = []core.Module{
	dummy.NewModule(),

	// Add your packages here
}
""",
    "config.yaml.example": """\
app:
  name: webcore
  port: 8080

# >>> webcore:database
database:
  driver: postgres
  host: localhost
# <<< webcore:database

# >>> webcore:redis
redis:
  host: localhost
  port: 6379
# <<< webcore:redis

# >>> webcore:pubsub
pubsub:
  project_id: my-project
# <<< webcore:pubsub
""",
    "access.yaml.example": """\
apikeys:
  - name: default
    key: change-me
""",
    "go.work": """\
go 1.25.0

use (
	./webcore
	./modules/dummy
)
""",
    "modules/dummy/go.mod": """\
module github.com/semanggilab/webcorego-template-mod

go 1.25.0
""",
    "modules/dummy/go.sum": "github.com/webcore-go/webcore v0.3.0 h1:abc=\n",
    "modules/dummy/module.go": """\
package dummy

import (
	"github.com/semanggilab/webcorego-template-mod/handler"
	"github.com/webcore-go/webcore/app/core"
)

const (
	ModuleName    = "dummy"
	ModuleVersion = "0.1.0"
)

func NewModule() core.Module {
	return &Module{handler: handler.New()}
}
""",
    "modules/dummy/config/config.go": "package config\n",
    "modules/dummy/service/service.go": "package service\n",
    "modules/dummy/repository/repository.go": "package repository\n",
    "modules/dummy/handler/handler.go": """\
package handler

import "github.com/semanggilab/webcorego-template-mod/service"

func New() *Handler { return &Handler{svc: service.New()} }
""",
    "modules/dummy/model/model.go": "package model\n",
}


def build_template(project_dir: Path) -> Path:
    """Write the miniature template into ``project_dir``."""
    for relative, content in TEMPLATE_FILES.items():
        path = project_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return project_dir


@pytest.fixture
def template_project() -> Path:
    """Create a cloned-template project directory."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield build_template(Path(temp_dir) / "webcore-project")
