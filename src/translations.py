"""
Translation system for Image Queue Converter
Provides internationalization support for English and Chinese
"""

from src.config import get_settings, DEFAULT_LANGUAGE

# Translation dictionaries
TRANSLATIONS = {
    'en': {
        # Main window
        'app_title': 'Image Queue Converter',
        'upload_images': 'Upload image(s)',
        'upload_more_images': 'Upload more image(s)',
        'output_format': 'Format:',
        'file_name': 'File name:',
        'file_name_placeholder': 'ConvertedImage',
        'convert': 'Convert',
        'saving_to': 'Saving to: {}',
        'drop_images_here': 'Drop images here',
        'remove_from_queue': 'Remove from queue',

        # File dialogs
        'select_images': 'Select Images',
        'image_files': 'Image Files',
        'select_output_folder': 'Select Output Folder',

        # Menus
        'file': 'File',
        'choose_output_folder': 'Choose Output Folder...',
        'exit': 'Exit',
        'settings': 'Settings',
        'debug_logging': 'Debug Logging',
        'english': 'English',
        'chinese': '中文',

        # Alerts
        'warning_title': 'Warning',
        'invalid_files_msg': 'Please select or drop valid PNG, JPG/JPEG or WEBP image files only.',
        'empty_queue_msg': 'Please upload/drag & drop one or more images of type (PNG, JPG/JPEG, WEBP).',
        'name_too_long_msg': 'There is a 250-character limit on filenames. Please shorten the name.',
        'invalid_image_msg': 'Error: The image with ID {} is invalid.',
        'unsupported_format_msg': 'Unsupported output format: {}',
        'save_failed_msg': 'Could not save {}: {}',
    },
    'zh': {
        # Main window
        'app_title': '图片队列转换器',
        'upload_images': '上传图片',
        'upload_more_images': '继续上传图片',
        'output_format': '格式:',
        'file_name': '文件名:',
        'file_name_placeholder': 'ConvertedImage',
        'convert': '转换',
        'saving_to': '保存到: {}',
        'drop_images_here': '将图片拖放到此处',
        'remove_from_queue': '从队列中移除',

        # File dialogs
        'select_images': '选择图片',
        'image_files': '图片文件',
        'select_output_folder': '选择输出文件夹',

        # Menus
        'file': '文件',
        'choose_output_folder': '选择输出文件夹...',
        'exit': '退出',
        'settings': '设置',
        'debug_logging': '调试日志',
        'english': 'English',
        'chinese': '中文',

        # Alerts
        'warning_title': '警告',
        'invalid_files_msg': '请仅选择或拖放有效的 PNG、JPG/JPEG 或 WEBP 图片文件。',
        'empty_queue_msg': '请上传或拖放一张或多张图片 (PNG, JPG/JPEG, WEBP)。',
        'name_too_long_msg': '文件名限制为 250 个字符，请缩短名称。',
        'invalid_image_msg': '错误: 编号为 {} 的图片无效。',
        'unsupported_format_msg': '不支持的输出格式: {}',
        'save_failed_msg': '无法保存 {}: {}',
    }
}

# Global language setting
_current_language = DEFAULT_LANGUAGE


def init_language():
    """Initialize language from settings"""
    global _current_language
    lang_code = get_settings().value('language', DEFAULT_LANGUAGE)
    _current_language = lang_code if lang_code in TRANSLATIONS else DEFAULT_LANGUAGE


def get_language():
    return _current_language


def set_language(lang_code):
    """Set current language and save to settings"""
    global _current_language
    if lang_code in TRANSLATIONS:
        _current_language = lang_code
        get_settings().setValue('language', lang_code)


def tr(key):
    """Translate a key to current language"""
    return TRANSLATIONS.get(_current_language, {}).get(key, key)


def format_tr(key, *args, **kwargs):
    """Translate and format a string"""
    translated = tr(key)
    if args:
        return translated.format(*args)
    elif kwargs:
        return translated.format(**kwargs)
    return translated
