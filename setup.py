# Copyright 2016-2026, Pulumi Corporation.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""The stratus provisioning runtime and the ToDo backend deployment."""

from setuptools import find_packages, setup

VERSION = "0.1.0"


def readme():
    try:
        with open('README.md', encoding='utf-8') as f:
            return f.read()
    except FileNotFoundError:
        return "stratus - Development Version"


setup(name='stratus',
      version=VERSION,
      description='Dependency-graph provisioning runtime with asynchronous outputs',
      long_description=readme(),
      long_description_content_type='text/markdown',
      license='Apache 2.0',
      packages=find_packages(include=("stratus", "stratus.*", "todo_infra", "todo_infra.*")),
      package_data={
          'stratus': [
              'py.typed'
          ]
      },
      python_requires='>=3.10',
      install_requires=[
          'semver>=2.13',
          'pyyaml>=6.0',
      ],
      extras_require={
          'test': [
              'pytest>=7.0',
              'pytest-asyncio>=0.21',
              'pytest-timeout>=2.1',
          ],
      },
      entry_points={
          'console_scripts': [
              'todo-infra=todo_infra.__main__:main',
          ],
      },
      zip_safe=False)
