from setuptools import find_packages, setup

setup(
    name="rifa-service",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    entry_points={"console_scripts": ["rifa-service=rifa_service.__main__:main"]},
    python_requires=">=3.8",
    install_requires=[
        "click",
        "eth-account",
        "eth-utils",
        "flask",
        "flask-marshmallow",
        "marshmallow",
        "prometheus-client",
        "structlog",
        "waitress",
        "web3>=7",
        "werkzeug",
    ],
    extras_require={"test": ["pytest"]},
)
