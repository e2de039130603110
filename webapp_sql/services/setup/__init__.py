"""Setup (provisioning) services.

This package contains orchestration helpers that *provision* and then *tear down*
the Azure infrastructure of the sample (resource group, SQL server and database,
web app, firewall rule).
"""
