"""
RD Credit App - Federal R&D Tax Credit Estimation Engine

Estimates a business's federal R&D tax credit under the Alternative
Simplified Credit (ASC) method from reported expense figures and assigns
a service-pricing tier based on the size of the resulting credit.
"""

__version__ = "0.1.0"
__author__ = "RD Credit Team"
