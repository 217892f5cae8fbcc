import setuptools
import os

own_dir = os.path.abspath(os.path.dirname(__file__))


def requirements():
    with open(os.path.join(own_dir, 'requirements.txt')) as f:
        for line in f.readlines():
            line = line.strip()
            if not line or line.startswith('#'):
                continue

            yield line


def modules():
    return [
        'gitutil',
        'slackutil',
    ]


def packages():
    # ci and ccc are namespace packages (no __init__.py), hence not found by find_packages
    return [
        'ccc',
        'ci',
        'jira_changelog',
        'model',
    ]


def version():
    with open(os.path.join(own_dir, 'VERSION')) as f:
        return f.read().strip()


setuptools.setup(
    name='jira-changelog',
    version=version(),
    description='Combine Git commit messages with Jira into a changelog',
    python_requires='>=3.11',
    py_modules=modules(),
    packages=packages(),
    install_requires=list(requirements()),
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'jira-changelog = jira_changelog.cli:main',
        ],
    },
)
