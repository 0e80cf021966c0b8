"""Private dictionaries of vendor attributes known to dcmcore.

Dict format {private_creator: {tag: (VR, VM, Name, Retired)}}, where the
high byte of the element is replaced with 'xx' since the block a private
creator reserves varies between data sets.
"""

private_dictionaries = {
    'GEMS_IDEN_01': {
        '0009xx01': ('LO', '1', 'Full Fidelity', ''),  # noqa
        '0009xx02': ('SH', '1', 'Suite ID', ''),  # noqa
        '0009xx04': ('SH', '1', 'Product ID', ''),  # noqa
        '0009xx27': ('SL', '1', 'Image Actual Date', ''),  # noqa
        '0009xx30': ('SH', '1', 'Service ID', ''),  # noqa
        '0009xxe3': ('UI', '1', 'Equipment UID', ''),  # noqa
    },
    'GEMS_PARM_01': {
        '0043xx01': ('SS', '1', 'Bitmap of prescan options', ''),  # noqa
        '0043xx02': ('SS', '1', 'Gradient offset in X', ''),  # noqa
        '0043xx1e': ('DS', '1', 'Delta Start Time [msec]', ''),  # noqa
        '0043xx27': ('SH', '1', 'Scan Pitch Ratio', ''),  # noqa
        '0043xx2c': ('SS', '1', 'Effective echo spacing', ''),  # noqa
    },
    'SIEMENS CSA HEADER': {
        '0029xx08': ('CS', '1', 'CSA Image Header Type', ''),  # noqa
        '0029xx09': ('LO', '1', 'CSA Image Header Version', ''),  # noqa
        '0029xx10': ('OB', '1', 'CSA Image Header Info', ''),  # noqa
        '0029xx18': ('CS', '1', 'CSA Series Header Type', ''),  # noqa
        '0029xx19': ('LO', '1', 'CSA Series Header Version', ''),  # noqa
        '0029xx20': ('OB', '1', 'CSA Series Header Info', ''),  # noqa
    },
    'SIEMENS MR HEADER': {
        '0019xx08': ('CS', '1', 'Image Type Text', ''),  # noqa
        '0019xx09': ('LO', '1', 'Sequence Name', ''),  # noqa
        '0019xx0b': ('DS', '1', 'Slice Measurement Duration', ''),  # noqa
        '0019xx0c': ('IS', '1', 'B Value', ''),  # noqa
        '0019xx0e': ('FD', '3', 'Diffusion Gradient Direction', ''),  # noqa
        '0019xx12': ('SL', '3', 'Table Position Origin', ''),  # noqa
    },
    'PIXELMED_PUBLICATION': {
        '0009xx01': ('LO', '1', 'Source Application Name', ''),  # noqa
        '0009xx02': ('UI', '1', 'Derived From UID', ''),  # noqa
        '0009xx10': ('SQ', '1', 'Derivation Sequence', ''),  # noqa
    },
}
