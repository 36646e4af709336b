from setuptools import setup

setup(
    name='LineSizer',
    version='0.1.0',
    description='Single-phase gas and liquid line sizing: friction factor, '
                'compressible pressure drop and sizing criteria',
    packages=['LineSizer'],
    package_data={'LineSizer': ['logging.ini', 'sizing_criteria.yaml']},
    include_package_data=True,
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Topic :: Scientific/Engineering',
    ],
    install_requires=[
        'CoolProp',
        'Pint',
        'Serialize',
        'scipy',
        'pyyaml',
    ],
    extras_require={
        'test': ['pytest'],
    },
)
