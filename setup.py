from setuptools import find_packages, setup


setup(
    name="ovirt-cloud-provider",
    version="0.1",
    description="oVirt external cloud provider for cluster orchestrators",
    url="https://github.com/oVirt/ovirt-openshift-extensions",
    packages=find_packages(),
    python_requires=">=3.8",
    install_requires=[
        "Twisted[tls]",
        "PyYAML",
        "zope.interface",
        ],
    extras_require={
        "test": ["pytest"],
        },
    entry_points={
        "console_scripts": [
            "ovirt-cloud-provider = ovirt_cloud.cli:main",
            ],
        },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: System Administrators",
        "Intended Audience :: Information Technology",
        "Programming Language :: Python :: 3",
        "Topic :: System :: Clustering",
        "Topic :: System :: Distributed Computing",
       ],
    )
