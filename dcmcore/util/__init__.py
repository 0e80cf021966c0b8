"""Tools for inspecting DICOM byte streams"""
