"""Test configuration and fixtures for wpactive."""

import tempfile
from collections.abc import Generator
from pathlib import Path

import phpserialize
import pytest
from sqlalchemy import create_engine, text

from wpactive.network import Site, SnapshotNetwork


class RecordingNetwork(SnapshotNetwork):
    """Snapshot network that counts site context switches."""

    def __init__(self, *args, fail_on: set[int] | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.fail_on = fail_on or set()
        self.switches: list[int] = []
        self.restores = 0
        self.reads: list[int] = []

    def switch_to_site(self, blog_id: int) -> None:
        self.switches.append(blog_id)
        super().switch_to_site(blog_id)

    def restore_current_site(self) -> bool:
        self.restores += 1
        return super().restore_current_site()

    def read_active_plugins(self, blog_id: int):
        self.reads.append(blog_id)
        if blog_id in self.fail_on:
            raise RuntimeError("database went away")
        return super().read_active_plugins(blog_id)


def php(value) -> str:
    """Serialize a Python value the way WordPress stores options."""
    return phpserialize.dumps(value).decode("utf-8")


@pytest.fixture
def network_factory() -> type[RecordingNetwork]:
    """Build in-memory networks that record context switches."""
    return RecordingNetwork


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def example_network() -> RecordingNetwork:
    """Three sites: foo on 1 and 3, bar on 2 and 3."""
    return RecordingNetwork(
        sites=[
            Site(blog_id=1, domain="example.com", path="/"),
            Site(blog_id=2, domain="example.com", path="/two/", archived=1),
            Site(blog_id=3, domain="three.example.com", path="/", spam=1),
        ],
        active_plugins={
            1: ["foo/foo.php"],
            2: ["bar/bar.php"],
            3: ["foo/foo.php", "bar/bar.php"],
        },
        installed_plugins=["foo/foo.php", "bar/bar.php", "baz/baz.php", "hello.php"],
        network_active_plugins=["baz/baz.php"],
    )


@pytest.fixture
def plugins_dir(temp_dir: Path) -> Path:
    """A wp-content/plugins directory with a few plugins installed."""
    root = temp_dir / "wp-content" / "plugins"
    (root / "foo").mkdir(parents=True)
    (root / "foo" / "foo.php").write_text("<?php\n/*\nPlugin Name: Foo\n*/\n")
    (root / "foo" / "helpers.php").write_text("<?php\nfunction foo_helper() {}\n")
    (root / "bar").mkdir()
    (root / "bar" / "bar.php").write_text("<?php\n/**\n * Plugin Name: Bar\n */\n")
    (root / "baz").mkdir()
    (root / "baz" / "baz.php").write_text("<?php\n/*\nPlugin Name: Baz\n*/\n")
    (root / "hello.php").write_text("<?php\n/*\nPlugin Name: Hello Dolly\n*/\n")
    (root / "index.php").write_text("<?php\n// Silence is golden.\n")
    (root / "empty-dir").mkdir()
    return root


BLOGS_DDL = """
CREATE TABLE wp_blogs (
    blog_id INTEGER PRIMARY KEY,
    site_id INTEGER NOT NULL DEFAULT 1,
    domain VARCHAR(200) NOT NULL DEFAULT '',
    path VARCHAR(100) NOT NULL DEFAULT '',
    registered DATETIME NOT NULL DEFAULT '0000-00-00 00:00:00',
    last_updated DATETIME NOT NULL DEFAULT '0000-00-00 00:00:00',
    public INTEGER NOT NULL DEFAULT 1,
    archived INTEGER NOT NULL DEFAULT 0,
    mature INTEGER NOT NULL DEFAULT 0,
    spam INTEGER NOT NULL DEFAULT 0,
    deleted INTEGER NOT NULL DEFAULT 0,
    lang_id INTEGER NOT NULL DEFAULT 0
)
"""

SITEMETA_DDL = """
CREATE TABLE wp_sitemeta (
    meta_id INTEGER PRIMARY KEY,
    site_id INTEGER NOT NULL DEFAULT 0,
    meta_key VARCHAR(255),
    meta_value TEXT
)
"""

OPTIONS_DDL = """
CREATE TABLE {name} (
    option_id INTEGER PRIMARY KEY,
    option_name VARCHAR(191) NOT NULL DEFAULT '',
    option_value TEXT NOT NULL,
    autoload VARCHAR(20) NOT NULL DEFAULT 'yes'
)
"""


def _add_site(conn, blog_id: int, domain: str, path: str, active, **flags) -> None:
    conn.execute(
        text(
            "INSERT INTO wp_blogs (blog_id, site_id, domain, path, registered, last_updated,"
            " public, archived, mature, spam, deleted, lang_id) VALUES (:blog_id, 1, :domain,"
            " :path, '2024-01-01 00:00:00', '2024-02-01 00:00:00', :public, :archived, 0,"
            " :spam, :deleted, 0)"
        ),
        {
            "blog_id": blog_id,
            "domain": domain,
            "path": path,
            "public": flags.get("public", 1),
            "archived": flags.get("archived", 0),
            "spam": flags.get("spam", 0),
            "deleted": flags.get("deleted", 0),
        },
    )
    options = "wp_options" if blog_id == 1 else f"wp_{blog_id}_options"
    conn.execute(text(OPTIONS_DDL.format(name=options)))
    if active is not None:
        conn.execute(
            text(f"INSERT INTO {options} (option_name, option_value) VALUES ('active_plugins', :v)"),
            {"v": active},
        )


@pytest.fixture
def multisite_db(temp_dir: Path) -> str:
    """SQLite copy of a small multisite network; returns its SQLAlchemy URL.

    foo is active on blogs 1 and 3, bar on 2 and 3, baz network-wide.
    Blog 4 has a corrupt active_plugins value, blog 5 has lost its options
    table, blog 6 has no active_plugins option at all.
    """
    db_path = temp_dir / "network.db"
    url = f"sqlite:///{db_path}"
    engine = create_engine(url)
    with engine.begin() as conn:
        conn.execute(text(BLOGS_DDL))
        conn.execute(text(SITEMETA_DDL))
        conn.execute(
            text(
                "INSERT INTO wp_sitemeta (site_id, meta_key, meta_value)"
                " VALUES (1, 'active_sitewide_plugins', :v)"
            ),
            {"v": php({"baz/baz.php": 1700000000})},
        )
        _add_site(conn, 1, "example.com", "/", php(["foo/foo.php"]))
        _add_site(conn, 2, "example.com", "/two/", php(["bar/bar.php"]), archived=1)
        _add_site(conn, 3, "example.com", "/three/", php(["foo/foo.php", "bar/bar.php"]), spam=1)
        _add_site(conn, 4, "example.com", "/four/", 'a:1:{i:0;s:99:"foo/foo.php";')
        _add_site(conn, 6, "example.com", "/six/", None)
        conn.execute(
            text(
                "INSERT INTO wp_blogs (blog_id, site_id, domain, path) VALUES (5, 1, 'example.com', '/five/')"
            )
        )
    engine.dispose()
    return url


@pytest.fixture
def single_site_db(temp_dir: Path) -> str:
    """A regular (non-multisite) install: no blogs or sitemeta tables."""
    db_path = temp_dir / "single.db"
    url = f"sqlite:///{db_path}"
    engine = create_engine(url)
    with engine.begin() as conn:
        conn.execute(text(OPTIONS_DDL.format(name="wp_options")))
        conn.execute(
            text("INSERT INTO wp_options (option_name, option_value) VALUES ('active_plugins', :v)"),
            {"v": php(["foo/foo.php"])},
        )
    engine.dispose()
    return url
