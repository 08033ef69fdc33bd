from setuptools import find_namespace_packages, setup

# Physical structure matches the import path under packages/
packages = find_namespace_packages(where="packages", include=["cuelight.core", "cuelight.core.*"])

setup(
    name="cuelight-core",
    version="0.1.0",
    python_requires=">=3.11",
    packages=packages,
    package_dir={"": "packages"},
    package_data={"cuelight.core.agents.prompts": ["packs/*/*.j2"]},
    include_package_data=True,
    install_requires=[
        "pydantic>=2",
        "openai>=1",
        "httpx",
        "jinja2",
        "pyyaml",
    ],
    extras_require={
        "test": ["pytest", "pytest-asyncio"],
    },
)
