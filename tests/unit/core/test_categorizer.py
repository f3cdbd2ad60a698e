"""Unit tests for categorizers."""

import pytest
from pkgmerge.core.categorizer import (
    ApiCategorizer,
    SourceCategorizer,
    get_categorizer,
    tier_for,
)
from pkgmerge.models.category import EXTRAS_TIER, TOOLS_TIER, ApiTier, SortMode, TierKind
from pkgmerge.models.item import MergedItem
from pkgmerge.models.package import PackageRecord, PackageType, Source


def _installed(record: PackageRecord) -> MergedItem:
    return MergedItem(record.identity, installed=record)


def _offered(record: PackageRecord) -> MergedItem:
    return MergedItem(record.identity, remote=record, remote_source=record.source)


class TestTierFor:
    """Tests for tier_for()."""

    @pytest.mark.parametrize(
        ("record", "tier"),
        [
            (PackageRecord(PackageType.TOOL, 1), TOOLS_TIER),
            (PackageRecord(PackageType.PLATFORM_TOOL, 1), TOOLS_TIER),
            (PackageRecord(PackageType.PLATFORM, 1, api_level=4), ApiTier(TierKind.API, 4)),
            (
                PackageRecord(PackageType.ADDON, 1, api_level=4, vendor="v", name="n"),
                ApiTier(TierKind.API, 4),
            ),
            (PackageRecord(PackageType.SAMPLE, 1, api_level=4), ApiTier(TierKind.API, 4)),
            (PackageRecord(PackageType.DOC, 1, api_level=4), ApiTier(TierKind.API, 4)),
            (PackageRecord(PackageType.EXTRA, 1, name="n"), EXTRAS_TIER),
        ],
    )
    def test_tier(self, record: PackageRecord, tier: ApiTier) -> None:
        """Each package type maps to its tier."""
        assert tier_for(record) == tier


class TestApiCategorizer:
    """Tests for ApiCategorizer."""

    def test_empty_keeps_permanent_tiers(self) -> None:
        """Tools and Extras are always present."""
        categories = ApiCategorizer().categorize([])
        assert [str(c) for c in categories] == ["Tools (#items=0)", "Extras (#items=0)"]

    def test_api_levels_descending(self) -> None:
        """API tiers sit between tools and extras, highest first."""
        items = [
            _installed(PackageRecord(PackageType.PLATFORM, 1, api_level=1)),
            _installed(PackageRecord(PackageType.EXTRA, 1, name="x")),
            _installed(PackageRecord(PackageType.PLATFORM, 1, api_level=3)),
            _installed(PackageRecord(PackageType.TOOL, 1)),
        ]
        categories = ApiCategorizer().categorize(items)
        assert [c.label for c in categories] == ["Tools", "API 3", "API 1", "Extras"]

    def test_platform_before_addons_and_samples(self) -> None:
        """Within a tier, platforms come first and addons sort by name."""
        items = [
            _installed(PackageRecord(PackageType.SAMPLE, 1, api_level=2)),
            _installed(PackageRecord(PackageType.ADDON, 1, api_level=2, vendor="b", name="z")),
            _installed(PackageRecord(PackageType.ADDON, 1, api_level=2, vendor="a", name="y")),
            _installed(PackageRecord(PackageType.PLATFORM, 1, api_level=2)),
        ]
        (_, api2, _) = ApiCategorizer().categorize(items)
        assert [item.display.title for item in api2.items] == [
            "SDK Platform API 2",
            "y by a, API 2",
            "z by b, API 2",
            "Samples for API 2",
        ]

    def test_reuses_equal_categories(self) -> None:
        """Unchanged categories are returned as the previous objects."""
        categorizer = ApiCategorizer()
        items = [_installed(PackageRecord(PackageType.TOOL, 1))]
        first = categorizer.categorize(items)
        second = categorizer.categorize(list(items), previous=first)
        assert all(a is b for a, b in zip(first, second, strict=True))

    def test_does_not_reuse_changed_category(self) -> None:
        """A category whose items changed is a new object."""
        categorizer = ApiCategorizer()
        first = categorizer.categorize([_installed(PackageRecord(PackageType.TOOL, 1))])
        second = categorizer.categorize(
            [_installed(PackageRecord(PackageType.TOOL, 2))], previous=first
        )
        assert second[0] is not first[0]
        assert second[1] is first[1]


class TestSourceCategorizer:
    """Tests for SourceCategorizer."""

    def test_empty_has_no_categories(self) -> None:
        """No permanent categories in source mode."""
        assert SourceCategorizer().categorize([]) == ()

    def test_local_bucket_first(self, repo1: Source, repo2: Source) -> None:
        """Unknown-origin installs come first, then sources by name."""
        items = [
            _offered(PackageRecord(PackageType.TOOL, 1, repo2)),
            _installed(PackageRecord(PackageType.EXTRA, 1, name="x")),
            _offered(PackageRecord(PackageType.PLATFORM, 1, repo1, api_level=1)),
        ]
        categories = SourceCategorizer().categorize(items)
        assert [c.label for c in categories] == [
            "Local Packages",
            "repo1 (repo.com)",
            "repo2 (repo.com)",
        ]
        assert categories[0].key is None

    def test_installed_with_known_source(self, repo1: Source) -> None:
        """An install that names its source joins that source."""
        item = _installed(PackageRecord(PackageType.TOOL, 1, repo1))
        (category,) = SourceCategorizer().categorize([item])
        assert category.key == repo1


class TestGetCategorizer:
    """Tests for get_categorizer()."""

    def test_modes(self) -> None:
        """Each mode has its categorizer."""
        assert isinstance(get_categorizer(SortMode.API), ApiCategorizer)
        assert isinstance(get_categorizer(SortMode.SOURCE), SourceCategorizer)
        assert get_categorizer(SortMode.SOURCE).mode == SortMode.SOURCE
