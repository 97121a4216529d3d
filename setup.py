"""Setup script for Vinyl Scrobbler."""

from setuptools import setup, find_packages
from pathlib import Path

# Read requirements
requirements_path = Path(__file__).parent / 'requirements.txt'
with open(requirements_path, 'r', encoding='utf-8') as f:
    requirements = [
        line.strip() for line in f
        if line.strip() and not line.startswith('#')
    ]

# Read README
readme_path = Path(__file__).parent / 'README.md'
with open(readme_path, 'r', encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='vinyl-scrobbler',
    version='0.1.0',
    description='Scrobble vinyl records to Last.fm using Discogs release data',
    long_description=long_description,
    long_description_content_type='text/markdown',
    author='Vinyl Scrobbler Contributors',
    python_requires='>=3.10',
    packages=find_packages(include=['vinyl_scrobbler', 'vinyl_scrobbler.*']),
    install_requires=requirements,
    extras_require={
        'test': ['pytest>=8.0'],
    },
    entry_points={
        'console_scripts': [
            'vinyl-scrobbler=vinyl_scrobbler.cli:app',
            'vinyl-scrobble=vinyl_scrobbler.cli:app',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: End Users/Desktop',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Programming Language :: Python :: 3.13',
    ],
)
