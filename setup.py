"""
Setup script for price_advisor package.
"""

from setuptools import setup, find_packages

setup(
    name="price-advisor",
    version="1.0.0",
    description="Moteur de recommandation de prix : prévision de demande, optimisation du profit, règles métier",
    author="Price Advisor Team",
    packages=find_packages(exclude=["scripts", "scripts.*"]),
    install_requires=[
        "supabase>=2.0.0",
        "pandas>=2.0.0",
        "numpy>=1.24.0",
        "python-dotenv>=1.0.0",
        "python-dateutil>=2.8.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    python_requires=">=3.9",
)
