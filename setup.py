"""
Setup configuration for webshop-e2e-kit
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the contents of README file
this_directory = Path(__file__).parent
long_description = ""
readme_file = this_directory / "README.md"
if readme_file.exists():
    long_description = readme_file.read_text(encoding='utf-8')

setup(
    name="webshop-e2e-kit",
    version="1.0.0",
    author="Your Name",
    author_email="your.email@example.com",
    description="Cross-browser end-to-end suite for the demo web shop with pytest-bdd scenarios, selenium page objects and combined HTML reports",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={
        'webshop_e2e_kit': [
            'templates/**/*',
            'templates/**/**/*',
            'templates/**/**/**/*',
        ],
    },
    classifiers=[
        "Framework :: Pytest",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Testing",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=[
        "pytest>=7.0.0",
        "pytest-bdd>=6.1.0",
        "jinja2>=3.0.0",
        "pandas>=2.0.0",
        "openpyxl>=3.1.0",
        "python-dotenv>=1.0.0",
        "selenium>=4.10.0",
        "psutil>=5.9.0",
    ],
    extras_require={
        "parallel": ["pytest-xdist>=3.0.0"],
        "test": ["pytest>=7.0.0"],
    },
    entry_points={
        "pytest11": [
            "webshop-e2e-kit = webshop_e2e_kit.plugin",
        ],
        "console_scripts": [
            "webshop-combined-report = webshop_e2e_kit.combined_report:main",
            "webshop-clean-reports = webshop_e2e_kit.utils.clean_reports:main",
            "webshop-kill-browsers = webshop_e2e_kit.utils.kill_stale_browsers:main",
        ],
    },
    keywords="pytest bdd selenium cross-browser e2e html-report cucumber",
)
