from setuptools import setup, find_packages
setup(
    name='infisical-secrets-action',
    version='1.0.0',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    include_package_data=True,
    package_data={
        'infisical_action': [
            'config/*.yaml',
            'config/*.ini',
        ],
    },
    description='Fetch Infisical secrets and export them as environment variables or a file.',
    python_requires='>=3.9',
    install_requires=[
        'invoke>=2.0.0',
        'pyyaml>=6.0',
        'PyJWT>=2.0.0',
        'requests>=2.27.0',
        'pydantic>=2.0.0',
        'botocore>=1.29.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'infisical-export = infisical_action.main:main',
            'infisical-cleanup = infisical_action.post:post',
        ],
    },
)
