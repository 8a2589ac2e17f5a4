from setuptools import setup

version = {}
with open('stacalc/version.py', 'r') as f:
    exec(f.read(), version)

with open('README.md', 'r') as f:
    long_description = f.read()

setup(
    name='stacalc',
    version=version['__version__'],
    description='Probability Distribution Calculator',
    long_description=long_description,
    long_description_content_type='text/markdown',
    python_requires='>=3.8',
    install_requires=[
        'numpy>=1.19',
        'matplotlib>=3.3',
        'scipy>=1.6',
        'sympy>=1.7',
        'markdown>=3.3',
        'pyyaml>=5.4',
        ],
    extras_require={'test': 'pytest'},
    packages=['stacalc', 'stacalc.common', 'stacalc.analyzer', 'stacalc.analyzer.report',
              'stacalc.standard', 'stacalc.standard.report'],
    entry_points={
        'console_scripts': ['stacalc = stacalc.__main__:main_analyze',
                            'stacalcdist = stacalc.__main__:main_standard',
                            ],
        },
    classifiers=[
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Development Status :: 4 - Beta',
        'Operating System :: OS Independent',
        ]
    )
