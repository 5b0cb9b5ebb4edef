from setuptools import setup

setup(
    name='affinestring',
    version='1.0.0',
    description='Transformation strings to 2D affine transforms',
    license='MIT',
    packages=['affinestring'],
    package_dir={'affinestring': 'src'},
    install_requires=[
                    'numpy',
                    'skia-python',
                    'colour',
                    'Pillow',
                    'ipython'
                    ],
    extras_require={
                    'test': ['pytest']
                    },
    python_requires='>=3.10',

    classifiers=[
        'Development Status :: 3 - Alpha',
        'Programming Language :: Python :: 3'
    ],
)
