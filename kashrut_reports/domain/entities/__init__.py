from .inspection_draft import (
    BasicInfoFields,
    DocumentsFields,
    CategoryFields,
    PhotosFields,
    InspectionDraft,
    merge_basic_info,
    merge_documents,
    merge_category,
    merge_photos,
    factory_values,
)
