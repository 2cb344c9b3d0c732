"""Tests for the site scan."""

import logging

import pytest

from wpactive.modules.active_on_sites import (
    active_plugin_dirs,
    find_sites_with_plugin,
    switched_to_site,
)
from wpactive.network import Site


class TestFindSites:
    def test_matches_in_registry_order(self, example_network):
        found = find_sites_with_plugin(example_network, "foo")
        assert [site.blog_id for site in found] == [1, 3]
        assert [site.url for site in found] == ["example.com/", "three.example.com/"]

    def test_result_is_immutable_tuple(self, example_network):
        assert isinstance(find_sites_with_plugin(example_network, "bar"), tuple)

    def test_no_matches(self, example_network):
        assert find_sites_with_plugin(example_network, "hello") == ()

    def test_context_switches_balance(self, example_network):
        before = example_network.current_site_id()
        find_sites_with_plugin(example_network, "foo")
        assert example_network.switches == [1, 2, 3]
        assert example_network.restores == 3
        assert example_network.current_site_id() == before

    def test_each_read_happens_inside_site_context(self, example_network):
        find_sites_with_plugin(example_network, "foo")
        assert example_network.reads == [1, 2, 3]

    def test_idempotent(self, example_network):
        first = find_sites_with_plugin(example_network, "bar")
        second = find_sites_with_plugin(example_network, "bar")
        assert first == second

    def test_duplicate_registry_entries_reported_once(self, network_factory):
        site = Site(blog_id=7, domain="example.com", path="/seven/")
        network = network_factory(sites=[site, site], active_plugins={7: ["foo/foo.php"]})
        assert find_sites_with_plugin(network, "foo") == (site,)

    def test_limit_caps_registry_and_warns(self, example_network, caplog):
        with caplog.at_level(logging.WARNING, logger="wpactive"):
            found = find_sites_with_plugin(example_network, "foo", limit=2)
        assert [site.blog_id for site in found] == [1]
        assert "results may be incomplete" in caplog.text

    def test_invalid_limit(self, example_network):
        with pytest.raises(ValueError):
            find_sites_with_plugin(example_network, "foo", limit=0)

    def test_progress_callback_sees_every_site(self, example_network):
        seen = []
        found = find_sites_with_plugin(
            example_network, "foo", on_site=lambda site, matched: seen.append((site.blog_id, matched))
        )
        assert seen == [(1, True), (2, False), (3, True)]
        assert [site.blog_id for site in found] == [1, 3]


class TestMalformedSites:
    @pytest.mark.parametrize(
        "raw",
        [None, "foo/foo.php", {"0": "foo/foo.php"}, 42, 'a:1:{i:0;s:99:"foo/foo.php";'],
    )
    def test_malformed_active_plugins_excluded(self, network_factory, raw):
        network = network_factory(
            sites=[
                Site(blog_id=1, domain="example.com"),
                Site(blog_id=2, domain="example.com", path="/two/"),
            ],
            active_plugins={1: raw, 2: ["foo/foo.php"]},
        )
        found = find_sites_with_plugin(network, "foo")
        assert [site.blog_id for site in found] == [2]
        assert network.restores == 2

    def test_malformed_value_logs_warning(self, caplog):
        site = Site(blog_id=4, domain="example.com", path="/four/")
        with caplog.at_level(logging.WARNING, logger="wpactive"):
            assert active_plugin_dirs("garbage", site) == []
        assert "malformed active_plugins on site 4" in caplog.text

    def test_non_string_entries_skipped(self):
        site = Site(blog_id=1, domain="example.com")
        assert active_plugin_dirs(["foo/foo.php", 3, None, "hello.php"], site) == ["foo", "."]


class TestContextRestore:
    def test_restores_context_when_read_raises(self, network_factory):
        network = network_factory(
            sites=[Site(blog_id=1, domain="a.test"), Site(blog_id=2, domain="b.test")],
            active_plugins={1: ["foo/foo.php"]},
            fail_on={2},
        )
        with pytest.raises(RuntimeError):
            find_sites_with_plugin(network, "foo")
        assert network.switches == [1, 2]
        assert network.restores == 2
        assert network.current_site_id() == 1

    def test_switched_to_site_nests(self, example_network):
        with switched_to_site(example_network, 2):
            assert example_network.current_site_id() == 2
            with switched_to_site(example_network, 3):
                assert example_network.current_site_id() == 3
            assert example_network.current_site_id() == 2
        assert example_network.current_site_id() == 1

    def test_restore_without_switch_is_noop(self, example_network):
        assert example_network.restore_current_site() is False
        assert example_network.current_site_id() == 1
