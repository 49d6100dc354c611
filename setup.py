import setuptools

requirements = [
    "discord.py>=2.4",
    "PyYAML",
    "typer",
]

test_requirements = [
    "pytest",
    "pytest-asyncio",
]

packages = setuptools.find_packages(where=".", include=["HireBot", "HireBot.*"])
if not packages:
    raise ValueError("No packages detected.")

setuptools.setup(
    name="HireBot",
    version="0.1.0",
    packages=packages,
    py_modules=["cli"],
    package_data={"HireBot": ["locales/*.yaml"]},
    install_requires=requirements,
    extras_require={"test": test_requirements},
    entry_points={"console_scripts": ["hirebot=cli:bot"]},
    python_requires=">=3.10",
    license="GNU General Public License v3.0",
    description="Discord bot for application intake and review",
    zip_safe=False,
)
