from setuptools import setup, find_packages

setup(name='ccedit',
      description='CC1101 register configuration and preset interchange tool',
      packages=find_packages(include=["ccedit*"]),
      include_package_data=True,
      version='0.4.0',
      python_requires=">=3.10,<4",
      install_requires=[
          'pyserial',
          'lark',
      ],
      extras_require={
          'test': ['pytest', 'ddt'],
      },
      entry_points={
          'console_scripts': [
              "ccedit=ccedit.cli.main:main",
          ],
      },
      )
