# app/domains/__init__.py

"""
업무 도메인 패키지 모음입니다. (pat, lims, lab, rpt)
"""
