from setuptools import setup, find_packages

setup(
    name='sparse_flow',
    version='1.0.0',
    description='Sparse feature tracking: Shi-Tomasi corners and pyramidal Lucas-Kanade optical flow',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.8',
    install_requires=[
        'numpy>=1.21',
        'scipy>=1.6',
        'matplotlib>=3.4',
        'Pillow>=8.0',
    ],
    extras_require={
        'dev': ['pytest>=7.0'],
    },
    test_suite='tests',
    tests_require=['pytest>=7.0'],
)
