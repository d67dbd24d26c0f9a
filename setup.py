from setuptools import setup, find_namespace_packages

setup(
    name="movie_catalog",
    version="0.1",
    packages=find_namespace_packages(include=["app*", "store*", "models*", "ingestion*"]),
    package_data={"app": ["data/*.json"]},
    install_requires=[
        "uvicorn",
        "fastapi",
        "pydantic>=2",
        "httpx>=0.27.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires='>=3.11',
)
