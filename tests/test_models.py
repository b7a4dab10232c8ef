"""Tests for core.domain.models."""

import pytest
from pydantic import ValidationError

from core.domain.models import PackageIdentity, PluginFamily, PluginVariant, ResolvedUrl


class TestPackageIdentity:

    def test_defaults(self):
        package = PackageIdentity(name="junaidbhura/polylang-pro", version="3.5.4.0")
        assert package.pretty_version == "3.5.4.0"
        assert package.unique_id == "junaidbhura/polylang-pro-3.5.4.0"
        assert package.dist_url is None

    def test_host_keys(self):
        package = PackageIdentity.model_validate(
            {"name": "a/b", "version": "1.0.0.0", "prettyVersion": "1.0", "distUrl": "https://x", "uniqueName": "a/b-1.0.0.0"}
        )
        assert package.pretty_version == "1.0"
        assert package.dist_url == "https://x"
        assert package.unique_id == "a/b-1.0.0.0"

    def test_frozen(self):
        package = PackageIdentity(name="a/b", version="1.0")
        with pytest.raises(ValidationError):
            package.dist_url = "https://x"

    def test_name_required(self):
        with pytest.raises(ValidationError):
            PackageIdentity(name="", version="1.0")


class TestResolvedUrl:

    def test_same_url_rewrite_is_still_a_rewrite(self):
        resolved = ResolvedUrl(original="https://x", rewritten="https://x")
        assert resolved.is_rewritten
        assert not ResolvedUrl(original="https://x").is_rewritten


class TestPluginVariant:

    def test_labels(self):
        assert PluginVariant(family=PluginFamily.POLYLANG_PRO, version="1").family.label() == "Polylang Pro"
