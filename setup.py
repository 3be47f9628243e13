from setuptools import setup, find_packages

setup(
    name='ifnamectl',
    version='0.1.0',
    packages=find_packages(exclude=['*.tests', '*.tests.*']),
    include_package_data=True,
    install_requires=[
        'typer[all]',
        'rich',
        'fastapi',
        'uvicorn',
        'pydantic',
        'kubernetes',
        'urllib3',
        'pyyaml',
        'jsonschema',
        'python-dotenv',
    ],
    extras_require={
        'test': [
            'pytest',
            'httpx',
        ],
    },
    entry_points={
        'console_scripts': [
            'ifnamectl=ifnamectl.cli:run',
            'ifnamectl-api=ifnamectl.api.main:serve',
        ]
    },
    description='Generate and apply OpenShift MachineConfigs that rename network interfaces with systemd .link files',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.8',
)
