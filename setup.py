# Copyright 2014 Google Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import io
import os

from setuptools import find_packages
from setuptools import setup


DEPENDENCIES = (
    "aiohttp >= 3.8.0, < 4.0.0",
    "multidict >= 6.0.0",
    "pydantic >= 2.7.0, < 3.0.0",
)

httpx_extra_require = ["httpx >= 0.23.0, < 1.0.0"]

testing_extra_require = [
    "aioresponses",
    # aioresponses 0.7.x cannot build responses on aiohttp >= 3.14
    "aiohttp < 3.14",
    "pytest",
    "pytest-asyncio",
    "pytest-cov",
] + httpx_extra_require

extras = {
    "httpx": httpx_extra_require,
    "testing": testing_extra_require,
}

package_root = os.path.abspath(os.path.dirname(__file__))

version = {}
with open(os.path.join(package_root, "apicall/version.py")) as fp:
    exec(fp.read(), version)
version = version["__version__"]

readme_filename = os.path.join(package_root, "README.rst")
long_description = ""
if os.path.exists(readme_filename):
    with io.open(readme_filename, encoding="utf-8") as fh:
        long_description = fh.read()

setup(
    name="apicall",
    version=version,
    description="Declarative HTTP call execution with one-shot credential refresh",
    long_description=long_description,
    packages=find_packages(exclude=("tests*", "system_tests*", "docs*", "samples*")),
    package_data={"apicall": ["py.typed"]},
    install_requires=DEPENDENCIES,
    extras_require=extras,
    python_requires=">=3.9",
    license="Apache 2.0",
    keywords="http client api refresh",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Topic :: Internet :: WWW/HTTP",
    ],
)
