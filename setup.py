import setuptools

setuptools.setup(
    name='paramsys',
    version='0.1',
    license='MIT',
    zip_safe=False,
    packages=setuptools.find_packages(include=['paramsys', 'paramsys.*']),
    fullname='paramsys Run-Time Parameter System',
    python_requires='>=3.8',
    install_requires=[
        'pyyaml', 'rich', 'rapidfuzz'
    ],
    extras_require={
        'test': ['pytest'],
    },
    description='Registry of typed run-time parameters with command line and INI-file overrides and generated help text.',
)
