from setuptools import setup, find_packages

setup(
    name="hostsweep",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=[
        "requests",
        "urllib3",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "hostsweep = hostsweep.cli:main",
        ],
    },
    author="exfil0",
    description="Virtual host discovery scanner: probes IPs with candidate Host headers over HTTP/HTTPS",
    license="MIT",
    keywords="vhost virtual-host discovery recon security",
)
