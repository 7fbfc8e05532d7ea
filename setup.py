from setuptools import setup, find_packages

setup(
    name="quiz-master",
    version="0.1.0",
    description="Subject-grouped multiple-choice quizzes with bulk text authoring",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "pyttsx3>=2.90",
        "numpy>=1.24.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "audio": [
            "sounddevice>=0.4.6",
        ],
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "quiz-master=quiz_master.cli:main",
        ],
    },
)
