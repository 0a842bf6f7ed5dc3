from setuptools import setup


setup(
    name='rpncalc',
    use_scm_version={
        'fallback_version': '0.1.0',
    },
    description='Stack-based calculator with chains, conditionals and loops',
    install_requires=[
        'regex',
        'prompt_toolkit',
    ],
    packages=['rpncalc'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.6',
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'coverage',
            'flake8',
        ],
    },
    entry_points={
        'console_scripts': [
            'rpncalc = rpncalc.cli:main',
        ],
    },
    license='ISC',
)
