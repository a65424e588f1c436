import re
from pathlib import Path

from setuptools import setup

install_requires = [
    "multidict>=6.0,<8.0",
    "yarl>=1.11,<2.0",
]

extras_require = {
    "aiohttp": ["aiohttp>=3.9,<4.0"],
    "httpx": ["httpx>=0.27,<1.0"],
    "prometheus": ["prometheus-client>=0.20"],
    "opentelemetry": ["opentelemetry-api>=1.25", "opentelemetry-semantic-conventions>=0.46b0"],
}
extras_require["test"] = [
    *extras_require["aiohttp"],
    *extras_require["httpx"],
    *extras_require["prometheus"],
    *extras_require["opentelemetry"],
    "opentelemetry-sdk>=1.25",
    "pytest>=8.0",
    "pytest-asyncio>=0.24",
]


def read(*parts):
    return Path(__file__).resolve().parent.joinpath(*parts).read_text().strip()


def read_version():
    regexp = re.compile(r"^__version__\W*=\W*\"([\d.abrc]+)\"")
    for line in read("aio_http_client", "__init__.py").splitlines():
        match = regexp.match(line)
        if match is not None:
            return match.group(1)
    else:
        raise RuntimeError("Cannot find version in aio_http_client/__init__.py")


with open("README.md", "r") as fh:
    long_description = fh.read()


setup(
    name="aio-http-client",
    version=read_version(),
    description="Transport-agnostic asynchronous HTTP request/response abstraction",
    long_description=long_description,
    long_description_content_type="text/markdown",
    platforms=["macOS", "POSIX", "Windows"],
    python_requires=">=3.11",
    project_urls={},
    license="MIT",
    packages=["aio_http_client"],
    package_dir={"aio_http_client": "./aio_http_client"},
    package_data={"aio_http_client": ["py.typed"]},
    install_requires=install_requires,
    extras_require=extras_require,
    include_package_data=True,
)
