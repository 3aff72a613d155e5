"""Shared test fixtures for classmap."""

from __future__ import annotations

from pathlib import Path

import pytest

from classmap.models import (
    AnalysisResult,
    Namespace,
    NamespaceKind,
    Reference,
    ReferenceKind,
)


@pytest.fixture()
def sample_ruby_file(tmp_path: Path) -> Path:
    """Create a single model file with known relationships."""
    code = tmp_path / "post.rb"
    code.write_text(
        """\
class Post < ApplicationRecord
  include Searchable

  belongs_to :author, class_name: "User"
  has_many :comments
end
""",
        encoding="utf-8",
    )
    return code


@pytest.fixture()
def sample_repo(tmp_path: Path) -> Path:
    """Create a small Rails-shaped project with cross-references."""
    models = tmp_path / "app" / "models"
    models.mkdir(parents=True)
    (models / "user.rb").write_text(
        """\
class User < ApplicationRecord
  has_many :posts
  has_many :blog_categories
end
""",
        encoding="utf-8",
    )
    (models / "post.rb").write_text(
        """\
class Post < ApplicationRecord
  include Searchable

  belongs_to :user
  has_many :comments
end
""",
        encoding="utf-8",
    )
    (models / "comment.rb").write_text(
        """\
class Comment < ApplicationRecord
  belongs_to :post
  belongs_to :author, class_name: "User"
end
""",
        encoding="utf-8",
    )
    (models / "user_spec.rb").write_text(
        """\
class UserSpec
  include Searchable
end
""",
        encoding="utf-8",
    )

    lib = tmp_path / "lib"
    lib.mkdir()
    (lib / "searchable.rb").write_text(
        """\
module Searchable
  class Index
  end
end
""",
        encoding="utf-8",
    )

    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "routes.rb").write_text(
        "class Routes\nend\n", encoding="utf-8"
    )
    return tmp_path


@pytest.fixture()
def sample_result() -> AnalysisResult:
    """Pre-built AnalysisResult for graph and encoder tests."""
    return AnalysisResult(
        namespaces=[
            Namespace(
                kind=NamespaceKind.CLASS,
                name="User",
                identifier="User",
                file="app/models/user.rb",
                declared_parent="ApplicationRecord",
            ),
            Namespace(
                kind=NamespaceKind.CLASS,
                name="Post",
                identifier="Post",
                file="app/models/post.rb",
                declared_parent="ApplicationRecord",
            ),
            Namespace(
                kind=NamespaceKind.MODULE,
                name="Searchable",
                identifier="Searchable",
                file="lib/searchable.rb",
            ),
            Namespace(
                kind=NamespaceKind.CLASS,
                name="Index",
                identifier="Searchable::Index",
                file="lib/searchable.rb",
                enclosing=2,
            ),
        ],
        references=[
            Reference("User", "ApplicationRecord", ReferenceKind.SUBCLASS_OF),
            Reference("User", "Post", ReferenceKind.HAS_MANY),
            Reference("Post", "ApplicationRecord", ReferenceKind.SUBCLASS_OF),
            Reference("Post", "Searchable", ReferenceKind.INCLUDES),
            Reference("Post", "User", ReferenceKind.BELONGS_TO),
            Reference("Searchable::Index", "Searchable", ReferenceKind.NESTED_IN),
        ],
    )
