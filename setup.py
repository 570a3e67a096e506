from setuptools import setup

setup(
    name="service1",
    version="0.1.0",
    license="MIT",
    py_modules=["service1"],
    description="Minimal hello-world HTTP service",
    classifiers=[
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
        "Programming Language :: Python :: 3",
        "Development Status :: 3 - Alpha",
    ],
    python_requires=">=3.8",
    install_requires=["click>=7.0", "flask>=2.0", "waitress>=2.0"],
    extras_require={
        "test": ["pytest", "requests"],
    },
    entry_points={
        "console_scripts": [
            "service1 = service1:run_from_cli",
        ],
    },
)
