"""Setup script for Review Poster"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="review-poster",
    version="1.0.0",
    author="Your Name",
    description="Web page for submitting product reviews with images to a review API",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["config", "web_app", "routes_auth", "routes_reviews"],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Framework :: Flask",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "Flask>=3.0.0",
        "Flask-Login>=0.6.3",
        "Flask-Session>=0.8.0",
        "redis>=5.0.0",
        "requests>=2.31.0",
        "python-dotenv>=1.0.0",
        "supabase>=2.10.0",
        "supabase-auth",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
        ],
    },
)
