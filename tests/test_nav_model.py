# tests/test_nav_model.py

from pathlib import Path

import pytest

from conftest import FakeProbe, HOME
from places_core.nav_model import NavigationModelBuilder
from places_core.special_dirs import SpecialDirectoryTable, WellKnownDir
from places_shared.config_schema import FavoritesConfig
from places_shared.places import TRASH, FavoriteRef, FavoriteTag, NavigationEntry, PathLocation


def favorites(*refs):
    return FavoritesConfig(favorites=tuple(refs))


@pytest.fixture
def builder(table, standard_dirs):
    probe = FakeProbe(dirs=list(standard_dirs.values()) + [Path("/srv/a"), Path("/srv/b")])
    return NavigationModelBuilder(table, probe=probe)


def test_home_and_missing_path_scenario():
    table = SpecialDirectoryTable.build({WellKnownDir.HOME: HOME}.get)
    builder = NavigationModelBuilder(table, probe=FakeProbe(dirs=[HOME]))

    entries = builder.build(
        favorites(FavoriteRef.of_tag(FavoriteTag.HOME), FavoriteRef.of_path("/nonexistent")),
        trash_is_non_empty=False,
    )

    assert [(e.label, e.location) for e in entries] == [
        ("Home", PathLocation(HOME)),
        ("Trash", TRASH),
    ]


@pytest.mark.parametrize(
    "refs",
    [
        (),
        (FavoriteRef.of_tag(FavoriteTag.MUSIC),),
        (FavoriteRef.of_path("/nowhere"), FavoriteRef.of_path("/srv/a")),
        (FavoriteRef.of_tag(FavoriteTag.HOME),) * 3,
    ],
)
def test_single_trailing_trash_entry(builder, refs):
    entries = builder.build(favorites(*refs), trash_is_non_empty=False)

    assert len(entries) <= len(refs) + 1
    assert entries[-1].is_trash
    assert sum(1 for e in entries if e.is_trash) == 1


def test_stored_order_is_preserved(builder):
    entries = builder.build(
        favorites(
            FavoriteRef.of_path("/srv/b"),
            FavoriteRef.of_tag(FavoriteTag.HOME),
            FavoriteRef.of_path("/srv/a"),
        ),
        trash_is_non_empty=False,
    )

    assert [e.label for e in entries] == ["b", "Home", "a", "Trash"]


def test_duplicates_are_kept(builder):
    entries = builder.build(
        favorites(FavoriteRef.of_tag(FavoriteTag.HOME), FavoriteRef.of_path(HOME)),
        trash_is_non_empty=False,
    )

    assert entries[0] == entries[1]
    assert len(entries) == 3


def test_build_is_repeatable(builder):
    config = favorites(FavoriteRef.of_tag(FavoriteTag.DOCUMENTS), FavoriteRef.of_path("/srv/a"))

    assert builder.build(config, True) == builder.build(config, True)


@pytest.mark.parametrize(
    "non_empty, icon",
    [(True, "user-trash-full-symbolic"), (False, "user-trash-symbolic")],
)
def test_trash_icon_follows_trash_state(builder, non_empty, icon):
    trash = builder.build(favorites(), trash_is_non_empty=non_empty)[-1]

    assert trash == NavigationEntry(label="Trash", icon=icon, location=TRASH)


def test_well_known_layout_is_sorted_with_trash_last(builder):
    entries = builder.build_well_known(trash_is_non_empty=False)
    labels = [e.label for e in entries]

    assert labels[-1] == "Trash"
    assert labels[:-1] == sorted(labels[:-1])
    assert "Filesystem" in labels
    assert "Home" in labels
