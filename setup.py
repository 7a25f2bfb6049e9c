"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='strictness-by-abstraction',
	version='0.1.0',
	packages=['strictness', ],
	entry_points={
		'console_scripts': ["strictness = strictness.cmdline:main"],
	},
	license='MIT',
	description='Strictness analysis of a tiny first-order functional language by abstract interpretation over the two-point domain',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Compilers",
		"Topic :: Education",
		"Environment :: Console",
    ],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)
