"""services 패키지 - 도메인 로직 (라우트에서 호출)"""
