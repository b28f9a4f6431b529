from setuptools import setup, find_namespace_packages


def scm_version():
    def local_scheme(version):
        return version.format_choice("+{node}", "+{node}.dirty")
    return {
        "root": ".",
        "relative_to": __file__,
        "version_scheme": "guess-next-dev",
        "local_scheme": local_scheme,
        "fallback_version": "0.1.0",
    }


setup(
    name="swdlog",
    use_scm_version=scm_version(),
    description="Decoder for SWD transaction logs exported by logic analyzers",
    license="0-clause BSD License",
    python_requires="~=3.9",
    setup_requires=[
        "setuptools",
        "setuptools_scm"
    ],
    install_requires=[
        "typing_extensions",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    packages=find_namespace_packages(include=["swdlog", "swdlog.*"]),
    entry_points={
        "console_scripts": [
            "swdlog = swdlog.cli:run_main"
        ],
    },
    classifiers=[
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved', # ' :: 0-clause BSD License', (not in PyPI)
        'Topic :: Software Development :: Embedded Systems',
        'Topic :: Software Development :: Debuggers',
    ],
)
