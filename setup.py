#!/usr/bin/env python

from setuptools import setup

import pimc


read_md = lambda f: open(f, 'r', encoding='utf-8').read()


setup(name='pimc',
      version="{ver}.{rev}".format(
          ver=pimc.__version__,
          rev=pimc.__revision__,
      ),
      description='Pi by Monte Carlo',
      long_description=read_md('README.md'),
      long_description_content_type="text/markdown",
      author='PIMC Development Team',
      install_requires=['greenlet>=0.3.4',
                        'pyzmq>=13.1.0'],
      extras_require={'nice': ['psutil>=2.0.0'],
                      'test': ['pytest']},
      packages=['pimc',
                'pimc.bootstrap',
                'pimc.launch'],
      platforms=['any'],
      keywords=['monte carlo',
                'pi',
                'numerical estimation',
                'greenlet',
                'zmq'],
      license='LGPL',
      classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Education',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: GNU Library or Lesser General Public '
        'License (LGPL)',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Scientific/Engineering :: Mathematics',
        ],
     )
