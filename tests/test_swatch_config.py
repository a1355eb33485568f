"""Tests for SwatchConfig.load_settings and its validation rules."""

from pathlib import Path

import pytest
from colour_swatch.core.errors import ErrorKind, SwatchError
from colour_swatch.core.image_source import PillowImageSource
from colour_swatch.core.settings import SettingsFile
from colour_swatch.core.swatch import (
    SwatchConfig,
    build_patches,
    check_counts,
    check_file,
    check_reflectances,
)
from colour_swatch.core.types import ColourLabel
from conftest import write_settings


def _load(path: Path) -> SwatchConfig:
    swatch = SwatchConfig(PillowImageSource())
    swatch.load_settings(str(path))
    return swatch


class TestFiles:
    def test_minimal_rawfile_only(self, swatch_dir: Path) -> None:
        ini = write_settings(swatch_dir / 's.ini', {'colorswatch': {'rawfile': 'raw.png'}})
        swatch = _load(ini)
        assert swatch.raw_file_path == str(swatch_dir / 'raw.png')
        assert swatch.image_file_path is None
        assert swatch.mask is None
        assert swatch.patches == []

    def test_returns_true(self, full_settings: Path) -> None:
        swatch = SwatchConfig(PillowImageSource())
        assert swatch.load_settings(str(full_settings)) is True

    def test_relative_paths_resolved_against_settings_dir(self, full_settings: Path, swatch_dir: Path) -> None:
        swatch = _load(full_settings)
        assert swatch.image_file_path == str(swatch_dir / 'render.png')
        assert swatch.mask is not None
        assert swatch.mask.file_path == str(swatch_dir / 'mask.png')

    def test_absolute_path_kept(self, swatch_dir: Path, tmp_path_factory: pytest.TempPathFactory) -> None:
        other = tmp_path_factory.mktemp('elsewhere')
        ini = write_settings(other / 's.ini', {'colorswatch': {'rawfile': str(swatch_dir / 'raw.png')}})
        swatch = _load(ini)
        assert swatch.raw_file_path == str(swatch_dir / 'raw.png')

    def test_nonexistent_rawfile_is_missing_file(self, swatch_dir: Path) -> None:
        ini = write_settings(swatch_dir / 's.ini', {'colorswatch': {'rawfile': 'nope.raw'}})
        with pytest.raises(SwatchError) as exc:
            _load(ini)
        assert exc.value.kind == ErrorKind.MISSING_FILE
        assert exc.value.path == str(swatch_dir / 'nope.raw')

    def test_absent_rawfile_key_is_missing_file(self, swatch_dir: Path) -> None:
        ini = write_settings(swatch_dir / 's.ini', {'colorswatch': {'file': 'render.png'}})
        with pytest.raises(SwatchError) as exc:
            _load(ini)
        assert exc.value.kind == ErrorKind.MISSING_FILE
        assert exc.value.key == 'colorswatch.rawfile'

    def test_nonexistent_optional_file(self, swatch_dir: Path) -> None:
        ini = write_settings(swatch_dir / 's.ini', {'colorswatch': {'rawfile': 'raw.png', 'file': 'gone.png'}})
        with pytest.raises(SwatchError) as exc:
            _load(ini)
        assert exc.value.kind == ErrorKind.MISSING_FILE
        assert exc.value.key == 'colorswatch.file'

    def test_directory_is_not_a_file(self, swatch_dir: Path) -> None:
        (swatch_dir / 'adir').mkdir()
        ini = write_settings(swatch_dir / 's.ini', {'colorswatch': {'rawfile': 'adir'}})
        with pytest.raises(SwatchError) as exc:
            _load(ini)
        assert exc.value.kind == ErrorKind.MISSING_FILE

    def test_settings_file_itself_missing(self, tmp_path: Path) -> None:
        with pytest.raises(SwatchError) as exc:
            _load(tmp_path / 'absent.ini')
        assert exc.value.kind == ErrorKind.MISSING_FILE

    def test_check_file_optional_absent_key(self, swatch_dir: Path) -> None:
        ini = write_settings(swatch_dir / 's.ini', {'colorswatch': {'rawfile': 'raw.png'}})
        check = check_file(SettingsFile(str(ini)), str(swatch_dir), 'colorswatch', 'file', required=False)
        assert check.ok
        assert check.value is None


class TestMaskSection:
    def test_mask_file_missing(self, swatch_dir: Path) -> None:
        ini = write_settings(
            swatch_dir / 's.ini',
            {'colorswatch': {'rawfile': 'raw.png'}, 'mask': {'file': 'nomask.png'}},
        )
        with pytest.raises(SwatchError) as exc:
            _load(ini)
        assert exc.value.kind == ErrorKind.MISSING_FILE
        assert exc.value.key == 'mask.file'

    def test_mask_section_without_file_key(self, swatch_dir: Path) -> None:
        ini = write_settings(
            swatch_dir / 's.ini',
            {'colorswatch': {'rawfile': 'raw.png'}, 'mask': {'backgroundcolor': 'white'}},
        )
        with pytest.raises(SwatchError) as exc:
            _load(ini)
        assert exc.value.kind == ErrorKind.MISSING_FILE

    def test_background_hex(self, full_settings: Path) -> None:
        swatch = _load(full_settings)
        assert swatch.mask.background_colour == (0, 0, 0, 255)

    def test_background_name(self, swatch_dir: Path) -> None:
        ini = write_settings(
            swatch_dir / 's.ini',
            {'colorswatch': {'rawfile': 'raw.png'}, 'mask': {'file': 'mask.png', 'backgroundcolor': 'white'}},
        )
        assert _load(ini).mask.background_colour == (255, 255, 255, 255)

    def test_background_absent_left_for_detection(self, swatch_dir: Path) -> None:
        ini = write_settings(
            swatch_dir / 's.ini',
            {'colorswatch': {'rawfile': 'raw.png'}, 'mask': {'file': 'mask.png'}},
        )
        swatch = _load(ini)
        assert swatch.mask.background_colour is None
        assert not swatch.mask.is_loaded()

    def test_invalid_background(self, swatch_dir: Path) -> None:
        ini = write_settings(
            swatch_dir / 's.ini',
            {'colorswatch': {'rawfile': 'raw.png'}, 'mask': {'file': 'mask.png', 'backgroundcolor': '#12345'}},
        )
        with pytest.raises(SwatchError) as exc:
            _load(ini)
        assert exc.value.kind == ErrorKind.INVALID_COLOR
        assert exc.value.value == '#12345'


class TestStrips:
    def test_patch_count_and_order(self, swatch_dir: Path) -> None:
        ini = write_settings(
            swatch_dir / 's.ini',
            {
                'colorswatch': {'rawfile': 'raw.png'},
                'strip:1': {'reflectances': '0.1, 0.2'},
                'strip:2': {'reflectances': '0.3, 0.4, 0.5', 'ISCCNBS': '7:pale pink, 8:grayish pink, 9:pinkish white'},
                'strip:3': {'reflectances': '0.6'},
            },
        )
        swatch = _load(ini)
        assert [p.reflectance for p in swatch.patches] == [0.1, 0.2, 0.3, 0.4, 0.5, 0.6]
        assert swatch.patches[0].colour_label is None
        assert swatch.patches[2].colour_label == ColourLabel(name='pale pink', code=7)
        assert swatch.patches[4].colour_label == ColourLabel(name='pinkish white', code=9)
        assert swatch.patches[5].colour_label is None

    def test_scan_stops_at_gap(self, swatch_dir: Path) -> None:
        ini = write_settings(
            swatch_dir / 's.ini',
            {
                'colorswatch': {'rawfile': 'raw.png'},
                'strip:1': {'reflectances': '0.1'},
                'strip:3': {'reflectances': '0.3'},
            },
        )
        assert [p.reflectance for p in _load(ini).patches] == [0.1]

    def test_no_strip_one_means_no_patches(self, swatch_dir: Path) -> None:
        ini = write_settings(
            swatch_dir / 's.ini',
            {'colorswatch': {'rawfile': 'raw.png'}, 'strip:2': {'reflectances': '0.1'}},
        )
        assert _load(ini).patches == []

    def test_quoted_labels_keep_commas(self, swatch_dir: Path) -> None:
        ini = write_settings(
            swatch_dir / 's.ini',
            {
                'colorswatch': {'rawfile': 'raw.png'},
                'strip:1': {'reflectances': '0.1, 0.2', 'ISCCNBS': '"1:pink, vivid", 2:strong pink'},
            },
        )
        swatch = _load(ini)
        assert swatch.patches[0].colour_label.name == 'pink, vivid'

    def test_count_mismatch_aborts_strip(self, swatch_dir: Path) -> None:
        ini = write_settings(
            swatch_dir / 's.ini',
            {
                'colorswatch': {'rawfile': 'raw.png'},
                'strip:1': {'reflectances': '0.1'},
                'strip:2': {'reflectances': '0.2, 0.3', 'ISCCNBS': '1:vivid pink'},
            },
        )
        swatch = SwatchConfig(PillowImageSource())
        with pytest.raises(SwatchError) as exc:
            swatch.load_settings(str(ini))
        assert exc.value.kind == ErrorKind.COUNT_MISMATCH
        assert exc.value.strip == 2
        assert 'strip:2' in str(exc.value)
        # strip 1 was appended, nothing from strip 2
        assert [p.reflectance for p in swatch.patches] == [0.1]

    def test_missing_reflectances(self, swatch_dir: Path) -> None:
        ini = write_settings(
            swatch_dir / 's.ini',
            {'colorswatch': {'rawfile': 'raw.png'}, 'strip:1': {'ISCCNBS': '1:vivid pink'}},
        )
        with pytest.raises(SwatchError) as exc:
            _load(ini)
        assert exc.value.kind == ErrorKind.MISSING_KEY
        assert exc.value.strip == 1

    def test_non_numeric_reflectance(self, swatch_dir: Path) -> None:
        ini = write_settings(
            swatch_dir / 's.ini',
            {'colorswatch': {'rawfile': 'raw.png'}, 'strip:1': {'reflectances': '0.1, bright'}},
        )
        with pytest.raises(SwatchError) as exc:
            _load(ini)
        assert exc.value.kind == ErrorKind.INVALID_VALUE
        assert exc.value.value == 'bright'

    def test_empty_reflectances_gives_no_patches(self, swatch_dir: Path) -> None:
        ini = write_settings(
            swatch_dir / 's.ini',
            {'colorswatch': {'rawfile': 'raw.png'}, 'strip:1': {'reflectances': ''}},
        )
        assert _load(ini).patches == []

    def test_check_reflectances_rule(self, swatch_dir: Path) -> None:
        ini = write_settings(
            swatch_dir / 's.ini',
            {'colorswatch': {'rawfile': 'raw.png'}, 'strip:1': {'reflectances': '1, 2.5'}},
        )
        check = check_reflectances(SettingsFile(str(ini)), 1)
        assert check.ok
        assert check.value == [1.0, 2.5]


class TestRules:
    def test_counts_ok_without_labels(self) -> None:
        assert check_counts(1, [0.1, 0.2], None).ok

    def test_counts_mismatch(self) -> None:
        check = check_counts(4, [0.1, 0.2], [ColourLabel('a', 1)])
        assert not check.ok
        assert check.error.kind == ErrorKind.COUNT_MISMATCH
        assert check.error.strip == 4

    def test_build_patches_missing_label_names_reflectance(self) -> None:
        check = build_patches(1, [0.1, 0.25], [ColourLabel('a', 1)])
        assert not check.ok
        assert check.error.kind == ErrorKind.MISSING_LABEL
        assert check.error.value == 0.25
        assert '0.25' in str(check.error)

    def test_build_patches_unlabelled(self) -> None:
        patches = build_patches(1, [0.1, 0.2], None).unwrap()
        assert [p.colour_label for p in patches] == [None, None]


class TestReuse:
    def test_second_load_replaces_state(self, full_settings: Path, swatch_dir: Path) -> None:
        swatch = _load(full_settings)
        assert len(swatch.patches) == 3
        ini = write_settings(swatch_dir / 'other.ini', {'colorswatch': {'rawfile': 'raw.png'}})
        swatch.load_settings(str(ini))
        assert swatch.patches == []
        assert swatch.mask is None
        assert swatch.image_file_path is None
        assert swatch.settings_path == str(ini)

    def test_failed_load_clears_previous_state(self, full_settings: Path, swatch_dir: Path) -> None:
        swatch = _load(full_settings)
        bad = write_settings(swatch_dir / 'bad.ini', {'colorswatch': {'rawfile': 'missing.raw'}})
        with pytest.raises(SwatchError):
            swatch.load_settings(str(bad))
        assert swatch.patches == []
        assert swatch.mask is None
        assert swatch.image_file_path is None


class TestMalformedSettings:
    def test_repeated_key_last_value_wins(self, swatch_dir: Path) -> None:
        ini = swatch_dir / 's.ini'
        ini.write_text('[colorswatch]\nrawfile = missing.png\nrawfile = raw.png\n')
        assert _load(ini).raw_file_path == str(swatch_dir / 'raw.png')

    def test_text_before_first_section(self, swatch_dir: Path) -> None:
        ini = swatch_dir / 's.ini'
        ini.write_text('rawfile = raw.png\n[colorswatch]\n')
        with pytest.raises(SwatchError) as exc:
            _load(ini)
        assert exc.value.kind == ErrorKind.INVALID_VALUE
        assert exc.value.path == str(ini)

    def test_non_utf8_file(self, swatch_dir: Path) -> None:
        ini = swatch_dir / 's.ini'
        ini.write_bytes(b'[colorswatch]\nrawfile = raw.png\n\n[strip:1]\nreflectances = 0.1\nISCCNBS = 1:caf\xe9\n')
        with pytest.raises(SwatchError) as exc:
            _load(ini)
        assert exc.value.kind == ErrorKind.INVALID_VALUE

    def test_translucent_background_token(self, swatch_dir: Path) -> None:
        ini = write_settings(
            swatch_dir / 's.ini',
            {'colorswatch': {'rawfile': 'raw.png'}, 'mask': {'file': 'mask.png', 'backgroundcolor': '#00000000'}},
        )
        assert _load(ini).mask.background_colour == (0, 0, 0, 0)
