# tests/test_config_schema.py

from pathlib import Path

import pytest

from places_shared.config_schema import (
    ConfigValidationError,
    DisplayConfig,
    FavoritesConfig,
    build_config,
    encode_favorite,
    parse_favorites,
)
from places_shared.places import FavoriteRef, FavoriteTag
from places_shared.ron import Variant

HOME_TAG = Variant.unit("Home")


def test_parse_tags_and_paths_in_order():
    refs = parse_favorites([HOME_TAG, Variant.newtype("Path", "/srv/data"), Variant.unit("Downloads"), HOME_TAG])

    assert refs == (
        FavoriteRef.of_tag(FavoriteTag.HOME),
        FavoriteRef.of_path(Path("/srv/data")),
        FavoriteRef.of_tag(FavoriteTag.DOWNLOADS),
        FavoriteRef.of_tag(FavoriteTag.HOME),
    )


def test_path_favorites_keep_surrounding_whitespace():
    refs = parse_favorites([Variant.newtype("Path", "/srv/dir "), Variant.newtype("Path", " lead")])

    assert refs == (FavoriteRef.of_path(Path("/srv/dir ")), FavoriteRef.of_path(Path(" lead")))


@pytest.mark.parametrize(
    "raw",
    [
        HOME_TAG,
        [Variant.unit("Trash")],
        [Variant.newtype("Path", 3)],
        [Variant.newtype("Path", "")],
        [Variant.unit("Path")],
        [Variant.newtype("Home", "/x")],
        ["Home"],
        [7],
    ],
)
def test_malformed_favorites_are_rejected(raw):
    with pytest.raises(ConfigValidationError):
        parse_favorites(raw)


def test_encode_favorite_matches_stored_shape():
    assert encode_favorite(FavoriteRef.of_tag(FavoriteTag.MUSIC)) == Variant.unit("Music")
    assert encode_favorite(FavoriteRef.of_path("/srv/data")) == Variant.newtype("Path", "/srv/data")


def test_file_manager_is_trimmed():
    config, errors = build_config(DisplayConfig, {"file_manager": "  nautilus "})

    assert config.file_manager == "nautilus"
    assert errors == []


def test_missing_keys_take_defaults_silently():
    config, errors = build_config(DisplayConfig, {})

    assert config == DisplayConfig(show_icon=True, file_manager="cosmic-files")
    assert errors == []


def test_bad_key_falls_back_and_reports():
    config, errors = build_config(DisplayConfig, {"show_icon": "yes", "file_manager": "nautilus"})

    assert config == DisplayConfig(show_icon=True, file_manager="nautilus")
    assert [e.key for e in errors] == ["show_icon"]


def test_favorites_document_defaults_to_empty():
    config, errors = build_config(FavoritesConfig, {"favorites": {"Home": True}})

    assert config.favorites == ()
    assert len(errors) == 1


def test_favorite_ref_requires_exactly_one_kind():
    with pytest.raises(ValueError):
        FavoriteRef()
    with pytest.raises(ValueError):
        FavoriteRef(tag=FavoriteTag.HOME, path=Path("/home"))
