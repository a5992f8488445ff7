
from setuptools import setup

setup(name='apprenticeship_irl',
      version='0.1.0',
      description='Apprenticeship learning via Inverse Reinforcement '
                  'Learning, using the max-margin method of Abbeel and Ng',
      url='https://github.com/aaronsnoswell/irl_methods',
      author='Aaron Snoswell',
      author_email='aaron.snoswell@uqconnect.edu.au',
      license='MIT',
      packages=[
            'apprenticeship_irl',
            'apprenticeship_irl.utils',
            'apprenticeship_irl.mdp'
      ],
      install_requires=['numpy>=1.26', 'cvxopt'],
      extras_require={'test': ['pytest']},
      zip_safe=False)
