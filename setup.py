from setuptools import setup, find_packages
from os import path
from io import open

setup_dir = path.abspath(path.dirname(__file__))
with open(path.join(setup_dir, 'README.md'),
          encoding='utf-8') as readme_file:
    long_description = readme_file.read()

setup(
    name="fsa_tools",
    version="0.1",
    packages=find_packages(exclude=["testing", "testing.*"]),
    package_data={
        "fsa_tools.automata": ["builtin/*.aut"]
    },
    include_package_data=True,

    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.22",
        "scipy"
    ],
    extras_require={
        "test": ["pytest"]
    },
    entry_points={
        "console_scripts": [
            "fsa-run = fsa_tools.cli:main"
        ]
    },

    license="MIT",
    description="""Parse finite-state automata from a compact text
    encoding and run them on input words""",

    long_description=long_description,
    long_description_content_type="text/markdown"
)
