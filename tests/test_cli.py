import logging

import pytest
from PIL import Image, ImageChops

from batch_watermarker.cli import VERSION, build_parser, main


def test_missing_input_directory(tmp_path, caplog):
    out = tmp_path / 'out'
    code = main(['-i', str(tmp_path / 'missing'), '-o', str(out), '-t', 'x'])
    assert code == 1
    assert 'does not exist' in caplog.text
    assert not out.exists()


def test_no_watermark_source_exits_before_creating_output(tmp_path, make_image, caplog):
    make_image('a.png')
    out = tmp_path / 'out'
    code = main(['-i', str(tmp_path / 'images'), '-o', str(out)])
    assert code == 1
    assert 'must be provided' in caplog.text
    assert not out.exists()


def test_both_watermark_sources_rejected(tmp_path, make_image, logo_path):
    make_image('a.png')
    out = tmp_path / 'out'
    code = main(['-i', str(tmp_path / 'images'), '-o', str(out), '-t', 'x', '-w', str(logo_path)])
    assert code == 1
    assert not out.exists()


@pytest.mark.parametrize('flag,value', [('-a', 'abc'), ('-a', '1.5'), ('-s', '-0.1')])
def test_invalid_numbers_are_usage_errors(tmp_path, flag, value):
    with pytest.raises(SystemExit) as exc:
        main(['-i', str(tmp_path), '-t', 'x', flag, value])
    assert exc.value.code == 2


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main(['--version'])
    assert exc.value.code == 0
    assert VERSION in capsys.readouterr().out


def test_defaults():
    args = build_parser().parse_args(['-i', 'in'])
    assert args.output == './watermarked'
    assert args.position == 'bottomright'
    assert args.opacity == 0.5
    assert args.scale == 0.2
    assert args.filter == '*.{jpg,jpeg,png,gif,webp}'


def test_empty_directory_succeeds(tmp_path, caplog):
    caplog.set_level(logging.INFO)
    (tmp_path / 'images').mkdir()
    code = main(['-i', str(tmp_path / 'images'), '-o', str(tmp_path / 'out'), '-t', 'x'])
    assert code == 0
    assert 'No images found' in caplog.text


def test_image_watermark_run_with_skipped_file(tmp_path, make_image, logo_path):
    make_image('a.png')
    make_image('b.png')
    (tmp_path / 'images' / 'c.png').write_bytes(b'')
    out = tmp_path / 'out'
    code = main(['-i', str(tmp_path / 'images'), '-o', str(out), '-w', str(logo_path), '-p', 'topleft'])
    assert code == 0
    assert sorted(p.name for p in out.iterdir()) == ['a.png', 'b.png']
    with Image.open(out / 'a.png') as img:
        # 100x50 logo at (10, 10), white at 50% over red
        assert img.getpixel((10, 10))[:3] == pytest.approx((255, 127, 127), abs=1)
        assert img.getpixel((9, 9))[:3] == (255, 0, 0)


def test_text_watermark_end_to_end(tmp_path, make_image):
    colors = {'red': (255, 0, 0), 'green': (0, 255, 0), 'blue': (0, 0, 255)}
    for name, rgb in colors.items():
        make_image(f'sample_{name}.png', size=(500, 300), color=rgb)
    out = tmp_path / 'out'

    code = main(['-i', str(tmp_path / 'images'), '-o', str(out), '-t', '© 2024'])

    assert code == 0
    assert sorted(p.name for p in out.iterdir()) == sorted(f'sample_{n}.png' for n in colors)
    for name, rgb in colors.items():
        with Image.open(out / f'sample_{name}.png') as img:
            assert img.size == (500, 300)
            diff = ImageChops.difference(img.convert('RGB'), Image.new('RGB', (500, 300), rgb))
            bbox = diff.getbbox()
            assert bbox is not None
            # 100x26 text canvas placed 10px from the bottom-right edges
            left, top, right, bottom = bbox
            assert left >= 390 and top >= 264
            assert right <= 490 and bottom <= 290
            if name == 'green':
                # brightest glyph pixel is white at 50% over pure green
                _, max_red = img.convert('RGB').crop(bbox).getchannel('R').getextrema()
                assert 100 <= max_red <= 160


def test_corrupt_exif_file_does_not_abort_run(tmp_path, make_image, logo_path):
    make_image('a.jpg', exif=b'Exif\x00\x00II*\x00\xff\xff\x00\x00')
    make_image('b.png')
    out = tmp_path / 'out'
    code = main(['-i', str(tmp_path / 'images'), '-o', str(out), '-w', str(logo_path)])
    assert code == 0
    assert sorted(p.name for p in out.iterdir()) == ['a.jpg', 'b.png']
