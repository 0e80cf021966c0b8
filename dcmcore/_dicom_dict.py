"""DICOM data dictionary of the attributes dcmcore knows by name.

Dict format {tag: (VR, VM, Name, Retired, Keyword)}
"""

DicomDictionary = {
    0x00020000: ('UL', '1', "File Meta Information Group Length", '', 'FileMetaInformationGroupLength'),  # noqa
    0x00020001: ('OB', '1', "File Meta Information Version", '', 'FileMetaInformationVersion'),  # noqa
    0x00020002: ('UI', '1', "Media Storage SOP Class UID", '', 'MediaStorageSOPClassUID'),  # noqa
    0x00020003: ('UI', '1', "Media Storage SOP Instance UID", '', 'MediaStorageSOPInstanceUID'),  # noqa
    0x00020010: ('UI', '1', "Transfer Syntax UID", '', 'TransferSyntaxUID'),  # noqa
    0x00020012: ('UI', '1', "Implementation Class UID", '', 'ImplementationClassUID'),  # noqa
    0x00020013: ('SH', '1', "Implementation Version Name", '', 'ImplementationVersionName'),  # noqa
    0x00020016: ('AE', '1', "Source Application Entity Title", '', 'SourceApplicationEntityTitle'),  # noqa
    0x00020100: ('UI', '1', "Private Information Creator UID", '', 'PrivateInformationCreatorUID'),  # noqa
    0x00020102: ('OB', '1', "Private Information", '', 'PrivateInformation'),  # noqa
    0x00041130: ('CS', '1', "File-set ID", '', 'FileSetID'),  # noqa
    0x00041200: ('UL', '1', "Offset of the First Directory Record of the Root Directory Entity", '', 'OffsetOfTheFirstDirectoryRecordOfTheRootDirectoryEntity'),  # noqa
    0x00041202: ('UL', '1', "Offset of the Last Directory Record of the Root Directory Entity", '', 'OffsetOfTheLastDirectoryRecordOfTheRootDirectoryEntity'),  # noqa
    0x00041212: ('US', '1', "File-set Consistency Flag", '', 'FileSetConsistencyFlag'),  # noqa
    0x00041220: ('SQ', '1', "Directory Record Sequence", '', 'DirectoryRecordSequence'),  # noqa
    0x00041400: ('UL', '1', "Offset of the Next Directory Record", '', 'OffsetOfTheNextDirectoryRecord'),  # noqa
    0x00041410: ('US', '1', "Record In-use Flag", '', 'RecordInUseFlag'),  # noqa
    0x00041420: ('UL', '1', "Offset of Referenced Lower-Level Directory Entity", '', 'OffsetOfReferencedLowerLevelDirectoryEntity'),  # noqa
    0x00041430: ('CS', '1', "Directory Record Type", '', 'DirectoryRecordType'),  # noqa
    0x00041500: ('CS', '1-8', "Referenced File ID", '', 'ReferencedFileID'),  # noqa
    0x00080000: ('UL', '1', "Identifying Group Length", 'Retired', 'IdentifyingGroupLength'),  # noqa
    0x00080005: ('CS', '1-n', "Specific Character Set", '', 'SpecificCharacterSet'),  # noqa
    0x00080008: ('CS', '2-n', "Image Type", '', 'ImageType'),  # noqa
    0x00080012: ('DA', '1', "Instance Creation Date", '', 'InstanceCreationDate'),  # noqa
    0x00080013: ('TM', '1', "Instance Creation Time", '', 'InstanceCreationTime'),  # noqa
    0x00080016: ('UI', '1', "SOP Class UID", '', 'SOPClassUID'),  # noqa
    0x00080018: ('UI', '1', "SOP Instance UID", '', 'SOPInstanceUID'),  # noqa
    0x00080020: ('DA', '1', "Study Date", '', 'StudyDate'),  # noqa
    0x00080021: ('DA', '1', "Series Date", '', 'SeriesDate'),  # noqa
    0x00080022: ('DA', '1', "Acquisition Date", '', 'AcquisitionDate'),  # noqa
    0x00080023: ('DA', '1', "Content Date", '', 'ContentDate'),  # noqa
    0x0008002A: ('DT', '1', "Acquisition DateTime", '', 'AcquisitionDateTime'),  # noqa
    0x00080030: ('TM', '1', "Study Time", '', 'StudyTime'),  # noqa
    0x00080031: ('TM', '1', "Series Time", '', 'SeriesTime'),  # noqa
    0x00080032: ('TM', '1', "Acquisition Time", '', 'AcquisitionTime'),  # noqa
    0x00080033: ('TM', '1', "Content Time", '', 'ContentTime'),  # noqa
    0x00080050: ('SH', '1', "Accession Number", '', 'AccessionNumber'),  # noqa
    0x00080060: ('CS', '1', "Modality", '', 'Modality'),  # noqa
    0x00080064: ('CS', '1', "Conversion Type", '', 'ConversionType'),  # noqa
    0x00080070: ('LO', '1', "Manufacturer", '', 'Manufacturer'),  # noqa
    0x00080080: ('LO', '1', "Institution Name", '', 'InstitutionName'),  # noqa
    0x00080090: ('PN', '1', "Referring Physician's Name", '', 'ReferringPhysicianName'),  # noqa
    0x00080100: ('SH', '1', "Code Value", '', 'CodeValue'),  # noqa
    0x00080102: ('SH', '1', "Coding Scheme Designator", '', 'CodingSchemeDesignator'),  # noqa
    0x00080104: ('LO', '1', "Code Meaning", '', 'CodeMeaning'),  # noqa
    0x00080119: ('UC', '1', "Long Code Value", '', 'LongCodeValue'),  # noqa
    0x00080120: ('UR', '1', "URN Code Value", '', 'URNCodeValue'),  # noqa
    0x00081030: ('LO', '1', "Study Description", '', 'StudyDescription'),  # noqa
    0x0008103E: ('LO', '1', "Series Description", '', 'SeriesDescription'),  # noqa
    0x00081090: ('LO', '1', "Manufacturer's Model Name", '', 'ManufacturerModelName'),  # noqa
    0x00081110: ('SQ', '1', "Referenced Study Sequence", '', 'ReferencedStudySequence'),  # noqa
    0x00081115: ('SQ', '1', "Referenced Series Sequence", '', 'ReferencedSeriesSequence'),  # noqa
    0x00081140: ('SQ', '1', "Referenced Image Sequence", '', 'ReferencedImageSequence'),  # noqa
    0x00081150: ('UI', '1', "Referenced SOP Class UID", '', 'ReferencedSOPClassUID'),  # noqa
    0x00081155: ('UI', '1', "Referenced SOP Instance UID", '', 'ReferencedSOPInstanceUID'),  # noqa
    0x00081160: ('IS', '1-n', "Referenced Frame Number", '', 'ReferencedFrameNumber'),  # noqa
    0x00082112: ('SQ', '1', "Source Image Sequence", '', 'SourceImageSequence'),  # noqa
    0x00089215: ('SQ', '1', "Derivation Code Sequence", '', 'DerivationCodeSequence'),  # noqa
    0x00100010: ('PN', '1', "Patient's Name", '', 'PatientName'),  # noqa
    0x00100020: ('LO', '1', "Patient ID", '', 'PatientID'),  # noqa
    0x00100030: ('DA', '1', "Patient's Birth Date", '', 'PatientBirthDate'),  # noqa
    0x00100032: ('TM', '1', "Patient's Birth Time", '', 'PatientBirthTime'),  # noqa
    0x00100040: ('CS', '1', "Patient's Sex", '', 'PatientSex'),  # noqa
    0x00101010: ('AS', '1', "Patient's Age", '', 'PatientAge'),  # noqa
    0x00101020: ('DS', '1', "Patient's Size", '', 'PatientSize'),  # noqa
    0x00101030: ('DS', '1', "Patient's Weight", '', 'PatientWeight'),  # noqa
    0x00104000: ('LT', '1', "Patient Comments", '', 'PatientComments'),  # noqa
    0x00180015: ('CS', '1', "Body Part Examined", '', 'BodyPartExamined'),  # noqa
    0x00180050: ('DS', '1', "Slice Thickness", '', 'SliceThickness'),  # noqa
    0x00180060: ('DS', '1', "KVP", '', 'KVP'),  # noqa
    0x00180088: ('DS', '1', "Spacing Between Slices", '', 'SpacingBetweenSlices'),  # noqa
    0x00181020: ('LO', '1-n', "Software Versions", '', 'SoftwareVersions'),  # noqa
    0x00181030: ('LO', '1', "Protocol Name", '', 'ProtocolName'),  # noqa
    0x00181151: ('IS', '1', "X-Ray Tube Current", '', 'XRayTubeCurrent'),  # noqa
    0x00185100: ('CS', '1', "Patient Position", '', 'PatientPosition'),  # noqa
    0x00186011: ('SQ', '1', "Sequence of Ultrasound Regions", '', 'SequenceOfUltrasoundRegions'),  # noqa
    0x00186050: ('UL', '1', "Number of Table Break Points", '', 'NumberOfTableBreakPoints'),  # noqa
    0x00186052: ('UL', '1-n', "Table of X Break Points", '', 'TableOfXBreakPoints'),  # noqa
    0x00186054: ('FD', '1-n', "Table of Y Break Points", '', 'TableOfYBreakPoints'),  # noqa
    0x00189004: ('CS', '1', "Content Qualification", '', 'ContentQualification'),  # noqa
    0x0020000D: ('UI', '1', "Study Instance UID", '', 'StudyInstanceUID'),  # noqa
    0x0020000E: ('UI', '1', "Series Instance UID", '', 'SeriesInstanceUID'),  # noqa
    0x00200010: ('SH', '1', "Study ID", '', 'StudyID'),  # noqa
    0x00200011: ('IS', '1', "Series Number", '', 'SeriesNumber'),  # noqa
    0x00200013: ('IS', '1', "Instance Number", '', 'InstanceNumber'),  # noqa
    0x00200020: ('CS', '2', "Patient Orientation", '', 'PatientOrientation'),  # noqa
    0x00200032: ('DS', '3', "Image Position (Patient)", '', 'ImagePositionPatient'),  # noqa
    0x00200037: ('DS', '6', "Image Orientation (Patient)", '', 'ImageOrientationPatient'),  # noqa
    0x00200052: ('UI', '1', "Frame of Reference UID", '', 'FrameOfReferenceUID'),  # noqa
    0x00201041: ('DS', '1', "Slice Location", '', 'SliceLocation'),  # noqa
    0x00209113: ('SQ', '1', "Plane Position Sequence", '', 'PlanePositionSequence'),  # noqa
    0x00209116: ('SQ', '1', "Plane Orientation Sequence", '', 'PlaneOrientationSequence'),  # noqa
    0x00280002: ('US', '1', "Samples per Pixel", '', 'SamplesPerPixel'),  # noqa
    0x00280004: ('CS', '1', "Photometric Interpretation", '', 'PhotometricInterpretation'),  # noqa
    0x00280006: ('US', '1', "Planar Configuration", '', 'PlanarConfiguration'),  # noqa
    0x00280008: ('IS', '1', "Number of Frames", '', 'NumberOfFrames'),  # noqa
    0x00280009: ('AT', '1-n', "Frame Increment Pointer", '', 'FrameIncrementPointer'),  # noqa
    0x00280010: ('US', '1', "Rows", '', 'Rows'),  # noqa
    0x00280011: ('US', '1', "Columns", '', 'Columns'),  # noqa
    0x00280030: ('DS', '2', "Pixel Spacing", '', 'PixelSpacing'),  # noqa
    0x00280100: ('US', '1', "Bits Allocated", '', 'BitsAllocated'),  # noqa
    0x00280101: ('US', '1', "Bits Stored", '', 'BitsStored'),  # noqa
    0x00280102: ('US', '1', "High Bit", '', 'HighBit'),  # noqa
    0x00280103: ('US', '1', "Pixel Representation", '', 'PixelRepresentation'),  # noqa
    0x00280106: ('US or SS', '1', "Smallest Image Pixel Value", '', 'SmallestImagePixelValue'),  # noqa
    0x00280107: ('US or SS', '1', "Largest Image Pixel Value", '', 'LargestImagePixelValue'),  # noqa
    0x00280120: ('US or SS', '1', "Pixel Padding Value", '', 'PixelPaddingValue'),  # noqa
    0x00281050: ('DS', '1-n', "Window Center", '', 'WindowCenter'),  # noqa
    0x00281051: ('DS', '1-n', "Window Width", '', 'WindowWidth'),  # noqa
    0x00281052: ('DS', '1', "Rescale Intercept", '', 'RescaleIntercept'),  # noqa
    0x00281053: ('DS', '1', "Rescale Slope", '', 'RescaleSlope'),  # noqa
    0x00281054: ('LO', '1', "Rescale Type", '', 'RescaleType'),  # noqa
    0x00281101: ('US or SS', '3', "Red Palette Color Lookup Table Descriptor", '', 'RedPaletteColorLookupTableDescriptor'),  # noqa
    0x00281201: ('OW', '1', "Red Palette Color Lookup Table Data", '', 'RedPaletteColorLookupTableData'),  # noqa
    0x00282110: ('CS', '1', "Lossy Image Compression", '', 'LossyImageCompression'),  # noqa
    0x00283002: ('US or SS', '3', "LUT Descriptor", '', 'LUTDescriptor'),  # noqa
    0x00283006: ('US or OW', '1-n', "LUT Data", '', 'LUTData'),  # noqa
    0x00283010: ('SQ', '1', "VOI LUT Sequence", '', 'VOILUTSequence'),  # noqa
    0x00400275: ('SQ', '1', "Request Attributes Sequence", '', 'RequestAttributesSequence'),  # noqa
    0x0040A010: ('CS', '1', "Relationship Type", '', 'RelationshipType'),  # noqa
    0x0040A040: ('CS', '1', "Value Type", '', 'ValueType'),  # noqa
    0x0040A043: ('SQ', '1', "Concept Name Code Sequence", '', 'ConceptNameCodeSequence'),  # noqa
    0x0040A160: ('UT', '1', "Text Value", '', 'TextValue'),  # noqa
    0x0040A168: ('SQ', '1', "Concept Code Sequence", '', 'ConceptCodeSequence'),  # noqa
    0x0040A730: ('SQ', '1', "Content Sequence", '', 'ContentSequence'),  # noqa
    0x00603000: ('SQ', '1', "Histogram Sequence", '', 'HistogramSequence'),  # noqa
    0x00603020: ('UL', '1-n', "Histogram Data", '', 'HistogramData'),  # noqa
    0x30040058: ('DS', '2-2n', "DVH Data", '', 'DVHData'),  # noqa
    0x30060050: ('DS', '3-3n', "Contour Data", '', 'ContourData'),  # noqa
    0x300A00EB: ('DS', '1-n', "Compensator Transmission Data", '', 'CompensatorTransmissionData'),  # noqa
    0x300A00EC: ('DS', '1-n', "Compensator Thickness Data", '', 'CompensatorThicknessData'),  # noqa
    0x300A0106: ('DS', '2-2n', "Block Data", '', 'BlockData'),  # noqa
    0x52009229: ('SQ', '1', "Shared Functional Groups Sequence", '', 'SharedFunctionalGroupsSequence'),  # noqa
    0x52009230: ('SQ', '1', "Per-frame Functional Groups Sequence", '', 'PerFrameFunctionalGroupsSequence'),  # noqa
    0x7FE00008: ('OF', '1', "Float Pixel Data", '', 'FloatPixelData'),  # noqa
    0x7FE00009: ('OD', '1', "Double Float Pixel Data", '', 'DoubleFloatPixelData'),  # noqa
    0x7FE00010: ('OB or OW', '1', "Pixel Data", '', 'PixelData'),  # noqa
    0xFFFAFFFA: ('SQ', '1', "Digital Signatures Sequence", '', 'DigitalSignaturesSequence'),  # noqa
    0xFFFCFFFC: ('OB', '1', "Data Set Trailing Padding", '', 'DataSetTrailingPadding'),  # noqa
    0xFFFEE000: ('NONE', '1', "Item", '', 'Item'),  # noqa
    0xFFFEE00D: ('NONE', '1', "Item Delimitation Item", '', 'ItemDelimitationItem'),  # noqa
    0xFFFEE0DD: ('NONE', '1', "Sequence Delimitation Item", '', 'SequenceDelimitationItem'),  # noqa
}

RepeatersDictionary = {
    '002031xx': ('CS', '1-n', "Source Image IDs", 'Retired', 'SourceImageIDs'),  # noqa
    '60xx0010': ('US', '1', "Overlay Rows", '', 'OverlayRows'),  # noqa
    '60xx0011': ('US', '1', "Overlay Columns", '', 'OverlayColumns'),  # noqa
    '60xx0040': ('CS', '1', "Overlay Type", '', 'OverlayType'),  # noqa
    '60xx0050': ('SS', '2', "Overlay Origin", '', 'OverlayOrigin'),  # noqa
    '60xx0100': ('US', '1', "Overlay Bits Allocated", '', 'OverlayBitsAllocated'),  # noqa
    '60xx0102': ('US', '1', "Overlay Bit Position", '', 'OverlayBitPosition'),  # noqa
    '60xx3000': ('OB or OW', '1', "Overlay Data", '', 'OverlayData'),  # noqa
    '50xx3000': ('OB or OW', '1', "Curve Data", 'Retired', 'CurveData'),  # noqa
}
