
from setuptools import setup, find_packages

setup(
    name='ticket_extractor',
    version='0.1.0',
    packages=find_packages(exclude=['tests']),
    install_requires=[
        'regex',
        'python-dateutil',
        'rapidfuzz',
        'pdfminer.six',
        'pdf2image',
        'pytesseract',
        'Pillow',
        'httpx',
        'click',
        'PyYAML',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'ticket-extractor=ticket_extractor.cli:main'
        ]
    }
)
