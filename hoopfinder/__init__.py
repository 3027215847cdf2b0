"""
HoopFinder - Seattle basketball courts and program schedules.
"""
