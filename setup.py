from setuptools import setup
from sys import version_info

setup(name='hdimount',
      version='0.1.0',
      description='Attach and eject disk images on macOS with hdiutil',
      url='https://github.com/kenlowrie/hdimount',
      author='Ken Lowrie',
      author_email='ken@kenlowrie.com',
      license='Apache',
      packages=['hdimount'],
      python_requires='>=3.8',
      install_requires=['kenl380.pylib'],
      extras_require={
        'test': ['pytest'],
      },
      entry_points = {
        'console_scripts': ['hdimount=hdimount.hdimount:hdimount_entry',
                            'hdimount{}=hdimount.hdimount:hdimount_entry'.format(version_info.major)
                           ],
      },
      zip_safe=False)
