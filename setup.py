from setuptools import setup, find_packages

setup(
    name="code-context",
    version="0.1.0",
    description="Project, file and editor context for AI-assist features",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "google-genai>=0.1.0",
        "click>=8.0.0",
        "rich>=13.0.0",
        "pygments>=2.0.0",
        "aiofiles>=23.1.0",
        "python-dotenv>=1.0.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "black>=22.0.0",
            "flake8>=6.0.0",
            "mypy>=1.0.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "code-context=code_context.cli:main",
        ],
    },
    python_requires=">=3.8",
)
