from setuptools import setup, find_packages

# load VERSION from file
exec(open('solprobe/version.py').read())

requires = [
    'httpx>=0.24.0',
    'pynacl>=1.4.0',
    'base58>=2.0.1',
]

tests_requires = [
    'pytest>=7.0.0',
    'pytest-asyncio>=0.21.0',
    'pytest-cov>=2.10.0',
    'pytest-mock>=3.6.0',
    'pytest-timeout>=1.4.1',
]

setup(
    name='solprobe',
    version=VERSION,
    description='Provisioning and verification harness for the Anchor basic-1 Solana program',
    license='MIT',
    packages=find_packages(include=['solprobe', 'solprobe.*']),
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    keywords=['solana', 'anchor', 'blockchain', 'testing'],
    classifiers=[
        'License :: OSI Approved :: MIT License',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: Testing',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
    ],
    install_requires=requires,
    extras_require={'test': tests_requires},
    entry_points={'console_scripts': ['solprobe=solprobe.harness.runner:main']},
    python_requires='>=3.8',
)
