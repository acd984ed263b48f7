"""
Packaging for diceDist, plus a few developer commands:
    python setup.py deps      install runtime and test dependencies
    python setup.py test      run the suite with coverage
    python setup.py coverage  html coverage report in a temp dir
    python setup.py clean     remove build artifacts, pass --yes to skip the prompt
"""
import glob
import os
import shlex
import subprocess
import sys
import tempfile
from setuptools import setup, find_packages, Command

ROOT = os.path.abspath(os.path.dirname(__file__) or os.getcwd())
ASSUME_YES = '--yes' in sys.argv
if ASSUME_YES:
    sys.argv.remove('--yes')

RUN_DEPS = ['numpy', 'pyyaml']
TEST_DEPS = ['coverage', 'flake8', 'mock', 'pylint', 'pytest', 'pytest-cov']
COV_DIR = os.path.join(tempfile.gettempdir(), 'diceDistCoverage')


def confirm(cmd):
    """ Show cmd and ask before running it, True when accepted. """
    print('Executing: ' + cmd)
    return ASSUME_YES or input('OK? y/n  ').strip().lower().startswith('y')


def run_in_root(*cmds):
    """ Run each command from the project root, restoring the old cwd afterwards. """
    old_cwd = os.getcwd()
    try:
        os.chdir(ROOT)
        for cmd in cmds:
            subprocess.call(shlex.split(cmd))
    finally:
        os.chdir(old_cwd)


class SimpleCommand(Command):
    """ A command without options. """
    user_options = []

    def initialize_options(self):
        pass

    def finalize_options(self):
        pass

    def run(self):
        raise NotImplementedError


class Clean(SimpleCommand):
    """ Equivalent of make clean. """
    def run(self):
        matched = glob.glob(os.path.join(ROOT, '**', '*.pyc'), recursive=True)
        matched += glob.glob('*.egg-info') + glob.glob('*.egg')
        cmd = 'rm -vrf .eggs .pytest_cache build dist ' + ' '.join(matched)
        if confirm(cmd):
            subprocess.call(shlex.split(cmd))


class InstallDeps(SimpleCommand):
    """ Install dependencies to run & test. """
    description = "Install the dependencies for the project."

    def run(self):
        cmd = 'pip install -U ' + ' '.join(RUN_DEPS + TEST_DEPS)
        if confirm(cmd):
            subprocess.call(shlex.split(cmd))


class Test(SimpleCommand):
    """ Run the tests and track coverage. """
    def run(self):
        run_in_root('py.test --cov=dicedist')


class Coverage(SimpleCommand):
    """ Run the tests, generate the coverage html report and open it in your browser. """
    def run(self):
        run_in_root('py.test --cov=dicedist',
                    'coverage html -d ' + COV_DIR,
                    'xdg-open ' + os.path.join(COV_DIR, 'index.html'))


SHORT_DESC = 'Exact probability distributions of dice expressions'
MY_NAME = 'Jeremy Pallats / starcraft.man'
MY_EMAIL = 'N/A'
setup(
    name='diceDist',
    version='0.1.0',
    description=SHORT_DESC,
    long_description=SHORT_DESC,
    url='https://github.com/starcraftman/diceBot',
    author=MY_NAME,
    author_email=MY_EMAIL,
    license='BSD',
    platforms=['any'],
    python_requires='>=3.8',
    classifiers=[
        'Development Status :: 2 - Pre-Alpha',
        'Environment :: Console',
        'License :: OSI Approved :: BSD License',
        'Programming Language :: Python :: 3',
        'Topic :: Games/Entertainment :: Role-Playing',
    ],
    keywords='dice probability distribution',
    packages=find_packages(exclude=['venv', 'tests', 'tests.*']),
    install_requires=RUN_DEPS,
    extras_require={
        'test': TEST_DEPS,
    },
    data_files=[('data', ['data/config.yml', 'data/log.yml'])],
    entry_points={
        'console_scripts': [
            'dicedist = dicedist.cli:main',
        ],
    },
    cmdclass={
        'clean': Clean,
        'coverage': Coverage,
        'deps': InstallDeps,
        'test': Test,
    }
)
