from setuptools import setup, find_packages

setup(
    name="suffix_tree_package",
    version="0.1.0",
    description="Linear-time suffix tree construction (Ukkonen) with substring queries",
    packages=find_packages(where='.', include=['suffix_tree_package', 'suffix_tree_package.*']),
    python_requires='>=3.10', # PEP 604 annotations (int | None) are evaluated at import time
    install_requires=[
        'numpy>=1.19.0'
    ],
    extras_require={
        # tests/ runs under pytest; each test module is also runnable as a plain script.
        'test': ['pytest'],
        # benchmark.py at the repository root.
        'benchmark': ['pandas', 'matplotlib', 'seaborn'],
    },
    zip_safe=False
)
