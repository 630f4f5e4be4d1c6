# -*- coding: utf-8 -*-
"""Create sample images and run a few watermarking demos.

Usage: python demo.py
"""
import os

from PIL import Image, ImageDraw, ImageFont

from batch_watermarker.cli import main

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
IMAGES_DIR = os.path.join(BASE_DIR, 'images')
WATERMARKED_DIR = os.path.join(BASE_DIR, 'watermarked')
LOGO_PATH = os.path.join(BASE_DIR, 'logo.png')

COLORS = {
    'red': (255, 0, 0),
    'green': (0, 255, 0),
    'blue': (0, 0, 255),
}


def create_sample_images():
    os.makedirs(IMAGES_DIR, exist_ok=True)
    if os.listdir(IMAGES_DIR):
        print('Sample images already exist, skipping creation.')
        return
    print('Creating sample images for demonstration...')
    for name, rgb in COLORS.items():
        path = os.path.join(IMAGES_DIR, f'sample_{name}.png')
        Image.new('RGB', (500, 300), rgb).save(path)
        print(f'Created {path}')

    print('Creating logo for watermark...')
    logo = Image.new('RGBA', (200, 100), (255, 255, 255, 128))
    draw = ImageDraw.Draw(logo)
    try:
        font = ImageFont.truetype('arial.ttf', 30)
    except IOError:
        font = ImageFont.load_default(size=30)
    draw.text((20, 35), 'WATERMARK', font=font, fill=(0, 0, 0, 255))
    logo.save(LOGO_PATH)


def run_demos():
    print('\n=== DEMO 1: Text Watermark ===')
    main(['-i', IMAGES_DIR, '-o', os.path.join(WATERMARKED_DIR, 'text'), '-t', '© 2024'])

    print('\n=== DEMO 2: Image Watermark ===')
    main(['-i', IMAGES_DIR, '-o', os.path.join(WATERMARKED_DIR, 'image'), '-w', LOGO_PATH])

    print('\n=== DEMO 3: Custom Position & Opacity ===')
    main(['-i', IMAGES_DIR, '-o', os.path.join(WATERMARKED_DIR, 'custom'),
          '-t', 'CENTER MARK', '-p', 'center', '-a', '0.8', '-s', '0.4'])

    print(f'\nAll demos completed. Check the {WATERMARKED_DIR} directory.')


if __name__ == '__main__':
    create_sample_images()
    run_demos()
